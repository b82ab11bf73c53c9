"""
Model Client Module

This module wraps the call to the Gemini model. Gemini is reached through
Google's OpenAI-compatible endpoint, so the OpenAI SDK does the transport.

Design Decisions:
- The system instruction is fixed when the client is built
- Every failure is returned as a ProviderError value, never raised
- Only transient failures (connection, timeout, 429, 5xx) are retried
- request_timeout_seconds bounds the whole call, retries included
"""

import asyncio
from typing import Any, Dict, List, Optional

from openai import APIConnectionError, AsyncOpenAI, InternalServerError, RateLimitError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from reviewx.config import Settings
from reviewx.logging_config import get_logger
from reviewx.models import EmptyResponse, ModelInvocationResult, ProviderError, Success

logger = get_logger(__name__)

# APITimeoutError is a subclass of APIConnectionError
TRANSIENT_ERRORS = (APIConnectionError, RateLimitError, InternalServerError)


class ModelClient:
    """
    Gemini model invocation.

    Usage:
        client = ModelClient(settings, policy.get_system_instruction())
        result = await client.generate(code)
    """

    def __init__(
        self,
        settings: Settings,
        system_instruction: str,
        client: Optional[AsyncOpenAI] = None
    ):
        """
        Initialize the model client.

        Args:
            settings: Application settings
            system_instruction: Instruction sent with every prompt
            client: Preconfigured SDK client (built from settings when omitted)
        """
        self.settings = settings
        self.model = settings.gemini_model
        self._system_instruction = system_instruction
        # Retries are handled here, not by the SDK
        self.client = client or AsyncOpenAI(
            api_key=settings.google_gemini_key,
            base_url=settings.gemini_base_url,
            timeout=settings.request_timeout_seconds,
            max_retries=0
        )

    @property
    def system_instruction(self) -> str:
        """Instruction sent with every prompt."""
        return self._system_instruction

    async def generate(self, prompt: str) -> ModelInvocationResult:
        """
        Generate a completion for `prompt`.

        Args:
            prompt: Non-empty user payload

        Returns:
            Success, EmptyResponse or ProviderError
        """
        logger.info(
            "Sending review request to Gemini",
            model=self.model,
            prompt_length=len(prompt)
        )

        try:
            # One deadline covers every attempt and backoff
            response = await asyncio.wait_for(
                self._create_completion(prompt),
                timeout=self.settings.request_timeout_seconds
            )
            text = self._extract_text(response)
            usage = self._extract_usage(response)
        except Exception as e:
            logger.error(
                "Gemini request failed",
                model=self.model,
                error=str(e),
                error_type=type(e).__name__
            )
            return ProviderError(message=f"{type(e).__name__}: {e}")

        if not text or not text.strip():
            logger.warning("Gemini returned an empty response", model=self.model)
            return EmptyResponse()

        logger.info(
            "Received Gemini response",
            model=self.model,
            response_length=len(text),
            usage=usage
        )
        return Success(text=text)

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        await self.client.close()

    def _build_messages(self, prompt: str) -> List[Dict[str, str]]:
        """Pair the system instruction with the per-call prompt."""
        return [
            {"role": "system", "content": self._system_instruction},
            {"role": "user", "content": prompt}
        ]

    async def _create_completion(self, prompt: str) -> Any:
        """Call the provider, retrying transient failures."""
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": self._build_messages(prompt),
        }
        if self.settings.temperature is not None:
            request["temperature"] = self.settings.temperature
        if self.settings.max_output_tokens is not None:
            request["max_tokens"] = self.settings.max_output_tokens

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_retries + 1),
            wait=wait_exponential(
                multiplier=self.settings.retry_base_delay,
                max=self.settings.retry_max_delay
            ),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=self._log_retry,
            reraise=True
        )

        response = None
        async for attempt in retrying:
            with attempt:
                response = await self.client.chat.completions.create(**request)
        return response

    def _extract_text(self, response: Any) -> Optional[str]:
        """
        Pull the generated text out of a chat completion.

        Returns None when the provider answered without any content.

        Raises:
            TypeError: If the response carries content of an unexpected type
        """
        if response is None:
            return None

        choices = getattr(response, "choices", None)
        if not choices:
            return None

        content = choices[0].message.content
        if content is not None and not isinstance(content, str):
            raise TypeError(f"Unexpected content type: {type(content).__name__}")
        return content

    def _extract_usage(self, response: Any) -> Optional[Dict[str, Any]]:
        """Token usage reported with the completion, if any."""
        usage = getattr(response, "usage", None)
        model_dump = getattr(usage, "model_dump", None)
        return model_dump() if callable(model_dump) else None

    def _log_retry(self, retry_state: RetryCallState) -> None:
        """Log a transient failure before the next attempt."""
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retrying Gemini request",
            model=self.model,
            attempt=retry_state.attempt_number,
            error_type=type(error).__name__ if error else None
        )
