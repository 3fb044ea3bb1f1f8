"""API request and response models."""

from api.models.requests import TreeRequest, ProofRequest, VerifyRequest
from api.models.responses import (
    HealthResponse,
    TreeResponse,
    ProofBody,
    ProofResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "TreeRequest",
    "ProofRequest",
    "VerifyRequest",
    "HealthResponse",
    "TreeResponse",
    "ProofBody",
    "ProofResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
