"""
Tests for the Application Runner

Tests that the launcher refuses to start with a bad configuration.
"""

from unittest.mock import MagicMock

import pytest

import run
from reviewx.config import FatalConfigurationError


def _raise_fatal():
    raise FatalConfigurationError("Invalid configuration: google_gemini_key")


def test_exits_on_fatal_configuration(monkeypatch):
    """Test a missing credential stops the launcher before uvicorn starts."""
    uvicorn_run = MagicMock()
    monkeypatch.setattr(run, "get_settings", _raise_fatal)
    monkeypatch.setattr(run.uvicorn, "run", uvicorn_run)

    with pytest.raises(SystemExit) as exc_info:
        run.main()

    assert exc_info.value.code == 1
    uvicorn_run.assert_not_called()


def test_starts_app_factory(monkeypatch, settings):
    """Test the launcher serves the app factory with configured host and port."""
    uvicorn_run = MagicMock()
    monkeypatch.setattr(run, "get_settings", lambda: settings)
    monkeypatch.setattr(run.uvicorn, "run", uvicorn_run)

    run.main()

    args, kwargs = uvicorn_run.call_args
    assert args == ("reviewx.main:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == settings.port
