"""
Tests for Logging Configuration

Tests the structlog processors.
"""

from reviewx.logging_config import add_app_context, filter_sensitive_data


class TestSensitiveDataFilter:
    """Test suite for secret redaction."""

    def test_redacts_sensitive_keys(self):
        """Test credential-like keys are redacted."""
        event = filter_sensitive_data(
            None, "info", {"event": "x", "google_gemini_key": "abc", "Authorization": "Bearer x"}
        )

        assert event["google_gemini_key"] == "[REDACTED]"
        assert event["Authorization"] == "[REDACTED]"
        assert event["event"] == "x"

    def test_redacts_google_api_key_values(self):
        """Test values shaped like Google API keys are redacted."""
        event = filter_sensitive_data(
            None, "error", {"event": "x", "error": "AIzaSyA1234567890abcdefghijklmnop"}
        )

        assert event["error"] == "[REDACTED]"

    def test_keeps_token_counts(self):
        """Test usage counters are not mistaken for secrets."""
        event = filter_sensitive_data(
            None, "info", {"event": "x", "usage": {"prompt_tokens": 10, "total_tokens": 42}}
        )

        assert event["usage"] == {"prompt_tokens": 10, "total_tokens": 42}

    def test_redacts_nested_keys(self):
        """Test nested dicts are filtered."""
        event = filter_sensitive_data(None, "info", {"event": "x", "ctx": {"api_key": "k"}})

        assert event["ctx"]["api_key"] == "[REDACTED]"


def test_add_app_context():
    """Test app name and version are attached."""
    event = add_app_context(None, "info", {"event": "x"})

    assert event["app"] == "reviewx"
    assert "version" in event
