"""
Test Configuration

Pytest configuration and fixtures for the test suite.
"""

from types import SimpleNamespace
from typing import Any, Generator, List, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from reviewx.config import Settings, get_settings
from reviewx.main import create_app
from reviewx.models import Success
from reviewx.services.review_service import ReviewService


class FakeModelClient:
    """Stands in for ModelClient and records every prompt it receives."""

    def __init__(self, outcome: Any = None, error: Optional[Exception] = None):
        self.outcome = outcome if outcome is not None else Success(text="Looks fine.")
        self.error = error
        self.prompts: List[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.outcome

    async def close(self) -> None:
        self.closed = True


def make_completion(content: Any) -> SimpleNamespace:
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=None
    )


@pytest.fixture
def settings() -> Settings:
    """Settings that never touch the environment or a .env file."""
    return Settings(
        _env_file=None,
        google_gemini_key="test-gemini-key",
        max_retries=0,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        log_json_format=False
    )


@pytest.fixture
def fake_model_client() -> FakeModelClient:
    """Model client returning a canned review."""
    return FakeModelClient()


@pytest.fixture
def review_service(fake_model_client: FakeModelClient) -> ReviewService:
    """Review service wired to the fake model client."""
    return ReviewService(fake_model_client)


@pytest.fixture
def sdk_client() -> SimpleNamespace:
    """Object shaped like AsyncOpenAI with a mocked completions endpoint."""
    return SimpleNamespace(
        chat=SimpleNamespace(
            completions=SimpleNamespace(
                create=AsyncMock(return_value=make_completion("Looks fine."))
            )
        ),
        close=AsyncMock()
    )


@pytest.fixture
def client(
    settings: Settings,
    review_service: ReviewService
) -> Generator[TestClient, None, None]:
    """Create a test client for synchronous tests."""
    app = create_app(settings, review_service=review_service)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def clear_settings_cache() -> Generator[None, None, None]:
    """Reset the cached settings around a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def completion():
    """Factory for chat completion objects."""
    return make_completion
