"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging, algorithm_logger, AlgorithmLogAdapter, StructuredFormatter
from .exceptions import (
    AlgorithmEngineError,
    ValidationError,
    TraversalError,
    InvalidTransition,
    NoOpTransition,
    SummaryError,
    ExportError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "algorithm_logger",
    "AlgorithmLogAdapter",
    "StructuredFormatter",
    "AlgorithmEngineError",
    "ValidationError",
    "TraversalError",
    "InvalidTransition",
    "NoOpTransition",
    "SummaryError",
    "ExportError",
]
