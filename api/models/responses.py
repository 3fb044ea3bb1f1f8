"""
Module 06 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "civisgrid-api"
    version: str = "v1"


class TreeResponse(BaseModel):
    """Response for POST /tree endpoint."""

    ok: bool = True
    root_label: str = Field(..., description="Root label of the tree")
    leaf_count: int = Field(..., description="Number of leaves")
    branch_count: int = Field(..., description="Number of branches (leaf_count - 1)")
    node_count: int = Field(..., description="Total nodes (2 * leaf_count - 1)")
    height: int = Field(..., description="Depth of the deepest leaf")


class ProofBody(BaseModel):
    """Portable form of an inclusion proof."""

    leaf_label: str = Field(..., description="Label of the proven item")
    root_label: str = Field(..., description="Root label the proof was generated from")
    entries: list[tuple[str, int]] = Field(
        default_factory=list,
        description="[sibling_label, side_bit] pairs, bottom-up; 0 = left, 1 = right",
    )


class ProofResponse(BaseModel):
    """Response for POST /proof endpoint."""

    ok: bool = True
    proof: ProofBody


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the proof establishes membership")
    leaf_label: str | None = Field(default=None, description="Label of the item, when decodable")
    root_label: str = Field(..., description="Root label checked against")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
