"""
Runtime Configuration Module

Provides configuration loading and management for CivisGrid.
"""

from .runtime import (
    ApiConfig,
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    get_default_config_template,
    load_config,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
    "get_default_config_template",
    "load_config",
    "set_default_config",
]
