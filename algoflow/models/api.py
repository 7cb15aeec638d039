"""
Pydantic request/response models for the HTTP API.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
    active_sessions: int = 0


class AlgorithmInfo(BaseModel):
    """Registry listing entry."""
    id: str
    version: str
    guideline: str
    i18n_key: Optional[str] = None
    node_count: int


class AlgorithmListResponse(BaseModel):
    algorithms: List[AlgorithmInfo]


class CreateSessionRequest(BaseModel):
    algorithm_id: str = Field(..., min_length=1, description="Registered algorithm id")


class AdvanceRequest(BaseModel):
    edge_id: str = Field(..., min_length=1, description="Outgoing edge of the current node")


class NodeRequest(BaseModel):
    node_id: str = Field(..., min_length=1, description="Node recorded on the path")


class SessionStateResponse(BaseModel):
    """Everything both views need to render one session."""
    session_id: str
    algorithm_id: str
    created_at: str
    snapshot: Dict[str, Any]
    wizard: Dict[str, Any]
    highlight: Dict[str, Any]
    viewport: Dict[str, Any]
    applied: Optional[bool] = Field(
        None, description="Whether the operation changed state (operations only)"
    )


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
