"""
Unit tests for configuration resolution
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from proformat.config import FrozenConfig, config_scope, resolve_config
from proformat.constants import DEFAULT_MODEL
from proformat.exceptions import ConfigurationError


@pytest.mark.unit
class TestResolveConfig:
    """Test resolution from defaults, environment and overrides"""

    def test_defaults(self):
        """Should use the mock adapter and no limits by default"""
        config = resolve_config()

        assert isinstance(config, FrozenConfig)
        assert config.api_key is None
        assert config.model == DEFAULT_MODEL
        assert config.use_real_api is False
        assert config.request_timeout_s is None
        assert config.max_input_chars is None
        assert config.export_dir == Path(".")

    def test_environment_variables(self):
        """Should read PROFORMAT_* variables"""
        env = {
            "PROFORMAT_MODEL": "gemini-2.0-flash",
            "PROFORMAT_REQUEST_TIMEOUT_S": "12.5",
            "PROFORMAT_MAX_INPUT_CHARS": "5000",
            "PROFORMAT_EXPORT_DIR": "/tmp/exports",
        }
        with patch.dict(os.environ, env):
            config = resolve_config()

        assert config.model == "gemini-2.0-flash"
        assert config.request_timeout_s == 12.5
        assert config.max_input_chars == 5000
        assert config.export_dir == Path("/tmp/exports")

    def test_gemini_api_key_alias(self):
        """Should accept the SDK's GEMINI_API_KEY variable"""
        with patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}):
            assert resolve_config().api_key == "env-key"

    def test_overrides_beat_environment(self):
        """Should prefer explicit overrides and ignore None values"""
        with patch.dict(os.environ, {"PROFORMAT_MODEL": "env-model"}):
            config = resolve_config(model="override-model", max_input_chars=None)

        assert config.model == "override-model"
        assert config.max_input_chars is None

    def test_blank_key_is_missing(self):
        """Should treat a whitespace key as unset"""
        assert resolve_config(api_key="   ").api_key is None

    def test_real_api_requires_key(self):
        """Should raise ConfigurationError without a key"""
        with pytest.raises(ConfigurationError, match="api_key is required"):
            resolve_config(use_real_api=True)

    @pytest.mark.parametrize(
        "overrides",
        [{"request_timeout_s": 0}, {"max_input_chars": 0}, {"model": ""}],
    )
    def test_invalid_values(self, overrides):
        """Should reject out-of-range values"""
        with pytest.raises(ConfigurationError):
            resolve_config(**overrides)


@pytest.mark.unit
class TestFrozenConfig:
    """Test the resolved configuration object"""

    def test_repr_redacts_key(self):
        """Should never print the API key"""
        config = resolve_config(api_key="secret-key")

        assert "secret-key" not in repr(config)
        assert "[REDACTED]" in str(config)
        assert config.to_dict()["api_key"] == "[REDACTED]"
        assert config.to_dict(redact=False)["api_key"] == "secret-key"


@pytest.mark.unit
class TestConfigScope:
    """Test ambient configuration scoping"""

    def test_scope_applies_inside_only(self):
        """Should resolve to the scoped config only within the block"""
        scoped = resolve_config(model="scoped-model")

        with config_scope(scoped):
            assert resolve_config() is scoped
            assert resolve_config(max_input_chars=10).model == "scoped-model"

        assert resolve_config().model == DEFAULT_MODEL
