"""
Module 00 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module: the error taxonomy,
canonical serialization and market-feed records.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonical_item,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    CivisError,
    CivisException,
    ConfigException,
    EmptyInputException,
    ErrorCodes,
    FeedMessageException,
    LabelNotFoundException,
    SchemaValidationException,
    TreeStructureException,
)

# Market feed records
from .feed import (
    FeedEvent,
    FeedEventType,
    FeedRecord,
    Order,
    Trade,
    parse_feed_message,
    read_feed_records,
    records_to_items,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonical_item",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "CivisError",
    "CivisException",
    "ConfigException",
    "EmptyInputException",
    "ErrorCodes",
    "FeedMessageException",
    "LabelNotFoundException",
    "SchemaValidationException",
    "TreeStructureException",
    # Feed
    "FeedEvent",
    "FeedEventType",
    "FeedRecord",
    "Order",
    "Trade",
    "parse_feed_message",
    "read_feed_records",
    "records_to_items",
]
