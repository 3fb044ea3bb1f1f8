"""
Runtime Configuration Tests
Tests for core/config/runtime.py
"""
import json

import pytest

from core.config.runtime import (
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    get_default_config_template,
    load_config,
    set_default_config,
)
from core.schemas.errors import ConfigException, ErrorCodes


_ENV_VARS = (
    "CIVIS_ITEM_ENCODING",
    "CIVIS_MAX_ITEMS",
    "CIVIS_LOG_LEVEL",
    "CIVIS_LOG_FILE",
    "CIVIS_API_HOST",
    "CIVIS_API_PORT",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No CIVIS_* variables and no config file in the working directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestDefaults:
    def test_defaults(self):
        config = RuntimeConfig()

        assert config.tree.item_encoding == "utf-8"
        assert config.tree.max_items == 1_000_000
        assert config.logging.level == "INFO"
        assert config.logging.file is None
        assert config.api.port == 8000

    def test_template_is_default_dict(self):
        assert json.loads(get_default_config_template()) == RuntimeConfig().to_dict()


class TestValidation:
    def test_bad_encoding(self):
        with pytest.raises(ConfigException) as exc_info:
            TreeConfig(item_encoding="base64")
        assert exc_info.value.code == ErrorCodes.CONFIG_ERROR

    def test_bad_max_items(self):
        with pytest.raises(ConfigException):
            TreeConfig(max_items=0)

    def test_unknown_key(self):
        with pytest.raises(ConfigException, match="Invalid configuration"):
            RuntimeConfig.from_dict({"tree": {"depth": 3}})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigException):
            RuntimeConfig.from_dict(["tree"])


class TestFromDict:
    def test_partial(self):
        config = RuntimeConfig.from_dict({"tree": {"item_encoding": "hex"}})

        assert config.tree.item_encoding == "hex"
        assert config.tree.max_items == 1_000_000
        assert config.logging.level == "INFO"

    def test_round_trip(self):
        data = RuntimeConfig.from_dict({"api": {"port": 9000}, "extra": {"k": 1}}).to_dict()
        assert RuntimeConfig.from_dict(data).to_dict() == data


class TestEnvOverrides:
    def test_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("CIVIS_ITEM_ENCODING", "hex")
        monkeypatch.setenv("CIVIS_MAX_ITEMS", "10")
        monkeypatch.setenv("CIVIS_API_PORT", "8080")

        config = RuntimeConfig.from_env()

        assert config.tree.item_encoding == "hex"
        assert config.tree.max_items == 10
        assert config.api.port == 8080

    def test_env_beats_file(self, clean_env, monkeypatch):
        path = clean_env / "civis.json"
        path.write_text(json.dumps({"logging": {"level": "WARNING"}, "tree": {"max_items": 5}}))
        monkeypatch.setenv("CIVIS_LOG_LEVEL", "DEBUG")

        config = load_config(path)

        assert config.logging.level == "DEBUG"
        assert config.tree.max_items == 5

    def test_bad_int(self, clean_env, monkeypatch):
        monkeypatch.setenv("CIVIS_MAX_ITEMS", "many")
        with pytest.raises(ConfigException, match="CIVIS_MAX_ITEMS"):
            RuntimeConfig.from_env()

    def test_override_revalidated(self, clean_env, monkeypatch):
        monkeypatch.setenv("CIVIS_ITEM_ENCODING", "latin-1")
        with pytest.raises(ConfigException):
            RuntimeConfig().with_env_overrides()

    def test_no_overrides_returns_same(self, clean_env):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config


class TestLoadConfig:
    def test_default_search_path(self, clean_env):
        (clean_env / "civis.json").write_text(json.dumps({"tree": {"item_encoding": "hex"}}))
        assert load_config().tree.item_encoding == "hex"

    def test_no_file_gives_defaults(self, clean_env):
        assert load_config().to_dict()["tree"] == RuntimeConfig().to_dict()["tree"]

    def test_missing_explicit_path(self, clean_env):
        with pytest.raises(FileNotFoundError):
            load_config(clean_env / "nope.json")

    def test_yaml_file(self, clean_env):
        path = clean_env / "civis.yaml"
        path.write_text("tree:\n  max_items: 3\nlogging:\n  level: ERROR\n")

        config = load_config(path)

        assert config.tree.max_items == 3
        assert config.logging.level == "ERROR"

    def test_default_config_cached(self, clean_env):
        first = get_default_config()
        assert get_default_config() is first

        replacement = RuntimeConfig.from_dict({"api": {"port": 1}})
        set_default_config(replacement)
        assert get_default_config() is replacement
