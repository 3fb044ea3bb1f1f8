"""
Module 06 - API Request Models

Pydantic models for API request validation.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


ItemEncoding = Literal["utf-8", "hex"]


class TreeRequest(BaseModel):
    """Request body for POST /tree endpoint."""

    items: list[str] = Field(
        ...,
        description="Ordered items; leaf i is items[i]",
    )
    encoding: ItemEncoding | None = Field(
        default=None,
        description="How items are turned into bytes (default: server config, utf-8)",
    )


class ProofRequest(TreeRequest):
    """Request body for POST /proof endpoint."""

    item: str = Field(
        ...,
        description="The item to prove (same encoding as items)",
    )


class VerifyRequest(BaseModel):
    """Request body for POST /verify endpoint."""

    item: str = Field(..., description="The item the proof is for")
    entries: list[Any] = Field(
        default_factory=list,
        description="Proof entries as [label, side_bit] pairs, bottom-up",
    )
    root_label: str = Field(..., description="Trusted root label")
    encoding: ItemEncoding | None = Field(default=None)
