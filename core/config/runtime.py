"""
Runtime Configuration

Central configuration for tree construction, logging and the HTTP service.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.merkle.nodes import ITEM_ENCODINGS
from core.schemas.errors import ConfigException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "CIVIS_"

# Config file search order when no explicit path is given
DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("civis.json"),
    Path(".civis.json"),
    Path.home() / ".config" / "civis" / "config.json",
)


@dataclass
class TreeConfig:
    """Configuration for building trees from textual input."""
    item_encoding: str = "utf-8"
    max_items: int = 1_000_000

    def __post_init__(self):
        if self.item_encoding not in ITEM_ENCODINGS:
            raise ConfigException(
                f"item_encoding must be one of {', '.join(ITEM_ENCODINGS)}, "
                f"got {self.item_encoding!r}"
            )
        if self.max_items < 1:
            raise ConfigException(f"max_items must be positive, got {self.max_items}")


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class ApiConfig:
    """Configuration for the HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CIVIS_ITEM_ENCODING: Encoding of textual items (utf-8 or hex)
        - CIVIS_MAX_ITEMS: Upper bound on items per tree
        - CIVIS_LOG_LEVEL: Log level
        - CIVIS_LOG_FILE: Optional log file path
        - CIVIS_API_HOST / CIVIS_API_PORT: HTTP bind address
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}ITEM_ENCODING"):
            overrides.setdefault("tree", {})["item_encoding"] = os.getenv(f"{ENV_PREFIX}ITEM_ENCODING")
        if os.getenv(f"{ENV_PREFIX}MAX_ITEMS"):
            overrides.setdefault("tree", {})["max_items"] = _env_int(f"{ENV_PREFIX}MAX_ITEMS")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("api", {})["port"] = _env_int(f"{ENV_PREFIX}API_PORT")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON or YAML file, chosen by suffix."""
        path = Path(path)
        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigException(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        try:
            tree = TreeConfig(**data.get("tree", {}))
            logging_conf = LoggingConfig(**data.get("logging", {}))
            api = ApiConfig(**data.get("api", {}))
        except TypeError as e:
            raise ConfigException(f"Invalid configuration: {e}") from e

        return cls(
            tree=tree,
            logging=logging_conf,
            api=api,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("tree", "logging", "api"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        # Re-run validation on the overridden tree section
        new_config.tree = TreeConfig(**vars(new_config.tree))
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "item_encoding": self.tree.item_encoding,
                "max_items": self.tree.max_items,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
            },
            "extra": self.extra,
        }


def _env_int(name: str) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigException(f"{name} must be an integer, got {raw!r}") from e


def load_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. When no path is given the
    first existing file among DEFAULT_CONFIG_PATHS is used.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ConfigException: If the file content is invalid
    """
    config: RuntimeConfig | None = None

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
