"""
Module 00 - Errors
File: errors.py

Purpose: Standard error taxonomy for the Merkle core and its surfaces.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    TREE_STRUCTURE_VIOLATION = "TREE_STRUCTURE_VIOLATION"

    # Lookup & Proof Errors
    LABEL_NOT_FOUND = "LABEL_NOT_FOUND"

    # Schema & Serialization Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    FEED_MESSAGE_INVALID = "FEED_MESSAGE_INVALID"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class CivisError(BaseModel):
    """
    Base error model for structured error communication.

    Used to render library exceptions in the API error envelope.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LABEL_NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class CivisException(Exception):
    """
    Base exception for all CivisGrid errors.

    Carries structured error information and can be converted
    to CivisError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "CIVIS_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> CivisError:
        """Convert this exception to a CivisError model."""
        return CivisError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(CivisException):
    """Raised when a tree is built from zero items."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from zero items",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class LabelNotFoundException(CivisException):
    """Raised when a label (or the item hashing to it) is not in the tree."""

    def __init__(
        self,
        message: str,
        label: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if label:
            full_details["label"] = label
        super().__init__(
            message=message,
            code=ErrorCodes.LABEL_NOT_FOUND,
            details=full_details,
            retryable=False,
        )
        self.label = label


class TreeStructureException(CivisException):
    """Raised when the builder produces an inconsistent node graph."""

    def __init__(
        self,
        message: str,
        node_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if node_index is not None:
            full_details["node_index"] = node_index
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_STRUCTURE_VIOLATION,
            details=full_details,
            retryable=False,
        )


class SchemaValidationException(CivisException):
    """Exception raised when input data fails validation."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(CivisException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class FeedMessageException(CivisException):
    """Exception raised when a market-feed message cannot be decoded."""

    def __init__(
        self,
        message: str,
        event: str | None = None,
        channel: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if event:
            full_details["event"] = event
        if channel:
            full_details["channel"] = channel
        super().__init__(
            message=message,
            code=ErrorCodes.FEED_MESSAGE_INVALID,
            details=full_details,
            retryable=False,
        )


class ConfigException(CivisException):
    """Exception raised when configuration cannot be loaded."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
