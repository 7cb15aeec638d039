from .api import (
    HealthResponse,
    AlgorithmInfo,
    AlgorithmListResponse,
    CreateSessionRequest,
    AdvanceRequest,
    NodeRequest,
    SessionStateResponse,
    ErrorResponse,
)

__all__ = [
    "HealthResponse",
    "AlgorithmInfo",
    "AlgorithmListResponse",
    "CreateSessionRequest",
    "AdvanceRequest",
    "NodeRequest",
    "SessionStateResponse",
    "ErrorResponse",
]
