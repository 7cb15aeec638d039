"""
Custom Exception Hierarchy

Provides specific exception types for graph loading, traversal and export
with structured error information.
"""
from typing import Optional, Dict, Any, List


class AlgorithmEngineError(Exception):
    """Base exception for all clinical algorithm engine errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(AlgorithmEngineError):
    """Malformed graph definition. Fatal at load time."""

    def __init__(
        self,
        message: str,
        algorithm_id: str = "unknown",
        problems: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={
                "algorithm_id": algorithm_id,
                "problems": list(problems or [message]),
                **(details or {})
            }
        )
        self.algorithm_id = algorithm_id
        self.problems = self.details["problems"]


class TraversalError(AlgorithmEngineError):
    """Base for in-session traversal errors. Never fatal."""


class InvalidTransition(TraversalError):
    """Advance requested with an edge that does not leave the current node."""

    def __init__(
        self,
        message: str,
        edge_id: Optional[str] = None,
        current_node_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_TRANSITION",
            details={
                "edge_id": edge_id,
                "current_node_id": current_node_id,
                **(details or {})
            }
        )
        self.edge_id = edge_id
        self.current_node_id = current_node_id


class NoOpTransition(TraversalError):
    """Back on an empty path or JumpTo a node that was never visited."""

    def __init__(
        self,
        message: str,
        operation: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="NO_OP_TRANSITION",
            details={"operation": operation, **(details or {})}
        )
        self.operation = operation


class SummaryError(AlgorithmEngineError):
    """Summary requested while the traversal is not at an outcome node."""

    def __init__(
        self,
        message: str,
        current_node_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="SUMMARY_ERROR",
            details={"current_node_id": current_node_id, **(details or {})}
        )
        self.current_node_id = current_node_id


class ExportError(AlgorithmEngineError):
    """Errors raised by a document generator during export."""

    def __init__(
        self,
        message: str,
        generator: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="EXPORT_ERROR",
            details={"generator": generator, **(details or {})}
        )
        self.generator = generator
