import os
from pathlib import Path
from unittest import mock

import pytest
from pydantic import ValidationError

from health_core.config import Settings


def test_settings_defaults():
    """Test that default values are set correctly."""
    with mock.patch.dict(os.environ, {}, clear=True):
        settings = Settings()
    assert settings.DEFAULT_UNIT_SYSTEM == "si"
    assert settings.DEFAULT_LOCALE is None
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FILE_ENABLED is False
    assert settings.LOG_DIR == Path("./output/logs")


def test_settings_env_override():
    """Test that environment variables override defaults."""
    env = {"DEFAULT_UNIT_SYSTEM": "Conventional", "DEFAULT_LOCALE": "en-US", "LOG_LEVEL": "DEBUG"}
    with mock.patch.dict(os.environ, env):
        settings = Settings()
        assert settings.DEFAULT_UNIT_SYSTEM == "conventional"
        assert settings.DEFAULT_LOCALE == "en-US"
        assert settings.LOG_LEVEL == "DEBUG"


def test_settings_types():
    """Test that types are coerced correctly."""
    with mock.patch.dict(os.environ, {"LOG_FILE_ENABLED": "true", "LOG_DIR": "/tmp/health-logs"}):
        settings = Settings()
        assert settings.LOG_FILE_ENABLED is True
        assert isinstance(settings.LOG_DIR, Path)


def test_unknown_unit_system_rejected():
    with mock.patch.dict(os.environ, {"DEFAULT_UNIT_SYSTEM": "imperial"}):
        with pytest.raises(ValidationError):
            Settings()
