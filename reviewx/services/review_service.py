"""
Review Service Module

This module turns a code snippet into a review. It validates the input,
invokes the model, and maps the model outcome onto the public result.

Design Decisions:
- Never raise: every outcome, including bugs in the client, becomes a ReviewResult
- Provider error details are logged, never returned to the caller
- Wiring comes from an explicit Settings object (no module-level client)
"""

from typing import Any, Optional

from reviewx.config import Settings
from reviewx.logging_config import get_logger
from reviewx.models import (
    EmptyResponse,
    ProviderError,
    ReviewFailure,
    ReviewResult,
    Success,
)
from reviewx.services.model_client import ModelClient
from reviewx.services.prompt_policy import PromptPolicy

logger = get_logger(__name__)


class ReviewService:
    """
    Code review pipeline.

    Usage:
        service = ReviewService.from_settings(settings)
        result = await service.review_code("def f(): pass")
    """

    def __init__(self, model_client: ModelClient):
        """
        Initialize the review service.

        Args:
            model_client: Client already bound to the reviewer instruction
        """
        self.model_client = model_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReviewService":
        """Build a service and its model client from settings."""
        policy = PromptPolicy(settings.system_instruction)
        model_client = ModelClient(settings, policy.get_system_instruction())
        return cls(model_client)

    async def review_code(self, raw_code: Any) -> ReviewResult:
        """
        Review a code snippet.

        Args:
            raw_code: Value received from the caller; only non-blank strings are reviewed

        Returns:
            ReviewResult describing the review or the reason it failed
        """
        code = self._validate(raw_code)
        if code is None:
            logger.info(
                "Rejected review request",
                input_type=type(raw_code).__name__
            )
            return ReviewResult.failed(ReviewFailure.INVALID_INPUT)

        # The instruction is bound to the client; the code is the whole prompt
        try:
            outcome = await self.model_client.generate(code)
        except Exception as e:
            logger.error(
                "Model client raised unexpectedly",
                error=str(e),
                error_type=type(e).__name__
            )
            outcome = ProviderError(message=str(e))

        return self._to_result(outcome)

    async def close(self) -> None:
        """Release resources held by the model client."""
        await self.model_client.close()

    def _validate(self, raw_code: Any) -> Optional[str]:
        """Return the code if it is a non-blank string, otherwise None."""
        if not isinstance(raw_code, str) or not raw_code.strip():
            return None
        return raw_code

    def _to_result(self, outcome: Any) -> ReviewResult:
        """Map a model invocation outcome onto the public result."""
        if isinstance(outcome, Success):
            return ReviewResult.completed(outcome.text)

        if isinstance(outcome, EmptyResponse):
            return ReviewResult.failed(ReviewFailure.EMPTY_RESPONSE)

        if isinstance(outcome, ProviderError):
            logger.warning("Review failed at provider", provider_message=outcome.message)
        else:
            logger.error(
                "Unexpected model outcome",
                outcome_type=type(outcome).__name__
            )
        return ReviewResult.failed(ReviewFailure.PROVIDER_ERROR)
