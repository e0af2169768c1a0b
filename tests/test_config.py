"""
Tests for ScopeBridge configuration.
"""

import os
import tempfile

import pytest
import structlog

from scopebridge.utils.config import Config, get_config, set_config, reset_config
from scopebridge.utils.exceptions import ConfigurationError
from scopebridge.utils.logging import add_context, clear_context, get_logger, setup_logging


class TestConfig:
    """Tests for Config class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = Config()

        assert config.log_level == "INFO"
        assert config.log_format == "json"

    def test_config_from_dict(self):
        """Test creating config from dictionary."""
        config = Config.from_dict({"log_level": "debug", "log_format": "TEXT"})

        assert config.log_level == "DEBUG"
        assert config.log_format == "text"

    def test_invalid_values(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_dict({"log_level": "LOUD"})

        assert "log_level" in str(exc_info.value)

    def test_config_to_dict(self):
        """Test converting config to dictionary."""
        config_dict = Config(log_level="WARNING").to_dict()

        assert config_dict == {"log_level": "WARNING", "log_format": "json"}

    def test_validate_required_fields(self):
        """Test validation of required fields."""
        config = Config()

        config.validate_required([])
        config.validate_required(["log_level"])

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate_required(["log_level", "app_id"])

        assert "Missing required configuration fields" in str(exc_info.value)
        assert "app_id" in str(exc_info.value)

    def test_load_from_env_file(self, clean_env):
        """Test loading configuration from environment file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.env', delete=False) as f:
            f.write("SCOPEBRIDGE_LOG_LEVEL=ERROR\n")
            f.write("SCOPEBRIDGE_LOG_FORMAT=text\n")
            env_file = f.name

        try:
            config = Config.load_from_env(env_file)

            assert config.log_level == "ERROR"
            assert config.log_format == "text"

        finally:
            os.unlink(env_file)
            os.environ.pop("SCOPEBRIDGE_LOG_LEVEL", None)
            os.environ.pop("SCOPEBRIDGE_LOG_FORMAT", None)

    def test_load_from_env_variables(self, clean_env):
        """Test loading configuration from environment variables."""
        clean_env.setenv("SCOPEBRIDGE_LOG_LEVEL", "DEBUG")

        config = Config.load_from_env()

        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_invalid_env_values(self, clean_env):
        """Test handling of invalid environment variable values."""
        clean_env.setenv("SCOPEBRIDGE_LOG_FORMAT", "xml")

        with pytest.raises(ConfigurationError):
            Config.load_from_env()


class TestGlobalConfig:
    """Tests for global configuration management."""

    def test_get_config(self):
        """Test getting global configuration."""
        assert isinstance(get_config(), Config)

    def test_set_config(self):
        """Test setting global configuration."""
        set_config(Config(log_level="ERROR"))

        assert get_config().log_level == "ERROR"

    def test_reset_config(self, clean_env):
        """Test resetting global configuration."""
        set_config(Config(log_level="ERROR"))
        assert get_config().log_level == "ERROR"

        reset_config()
        assert get_config().log_level == "INFO"


class TestLogging:
    """Tests for logging setup."""

    def test_setup_logging_text(self, test_config, capsys):
        try:
            setup_logging(test_config)
            get_logger("tests", component="logging").info("hello", answer=42)

            out = capsys.readouterr().out
            assert "hello" in out
            assert "answer" in out
        finally:
            structlog.reset_defaults()

    def test_setup_logging_filters_level(self, capsys):
        try:
            setup_logging(Config(log_level="ERROR", log_format="json"))
            logger = get_logger("tests")
            logger.info("quiet")
            logger.error("loud")

            out = capsys.readouterr().out
            assert "quiet" not in out
            assert '"event": "loud"' in out
        finally:
            structlog.reset_defaults()

    def test_context_variables(self, capsys):
        try:
            setup_logging(Config(log_level="INFO", log_format="json"))
            add_context(request_id="r-1")
            get_logger("tests").info("with context")
            clear_context()
            get_logger("tests").info("without context")

            lines = capsys.readouterr().out.strip().splitlines()
            assert '"request_id": "r-1"' in lines[-2]
            assert "request_id" not in lines[-1]
        finally:
            clear_context()
            structlog.reset_defaults()
