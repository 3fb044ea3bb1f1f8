"""
Module 06 - API Dependencies

Dependency injection for the API.
"""

from __future__ import annotations

import logging

from core.config.runtime import RuntimeConfig, get_default_config
from core.merkle import decode_item

logger = logging.getLogger(__name__)


def get_runtime_config() -> RuntimeConfig:
    """Process-wide configuration: config file, then environment overrides.

    The .env file is loaded automatically by core.config.runtime on import.
    """
    return get_default_config()


def resolve_encoding(requested: str | None, config: RuntimeConfig) -> str:
    """Request encoding wins over the configured default."""
    return requested or config.tree.item_encoding


def decode_items(items: list[str], encoding: str) -> list[bytes]:
    """Decode request items into leaf bytes.

    Raises:
        SchemaValidationException: If an item does not decode
    """
    return [decode_item(text, encoding) for text in items]
