"""
Data Models Module

This module defines all Pydantic models used throughout the application.
Strong typing ensures data integrity and provides clear contracts between components.

Design Decisions:
- Use Pydantic models for all data transfer objects
- Model invocation outcomes are a discriminated union, not exceptions
- Failure classification travels with the result but is never serialized
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================

class ReviewFailure(str, Enum):
    """Why a review could not be produced."""
    INVALID_INPUT = "invalid_input"
    EMPTY_RESPONSE = "empty_response"
    PROVIDER_ERROR = "provider_error"


class ReviewState(str, Enum):
    """Terminal state of a single review call."""
    REJECTED = "rejected"
    FAILED = "failed"
    COMPLETED = "completed"


FAILURE_MESSAGES = {
    ReviewFailure.INVALID_INPUT: "Invalid input: Code must be a non-empty string.",
    ReviewFailure.EMPTY_RESPONSE: "No content generated.",
    ReviewFailure.PROVIDER_ERROR: "Failed to generate AI response. Please try again later.",
}


# =============================================================================
# Request Models
# =============================================================================

class ReviewRequest(BaseModel):
    """
    Body of a review request.

    `code` is deliberately untyped so that a non-string value reaches
    the review service and is reported as invalid input.
    """
    code: Any = None


# =============================================================================
# Model Invocation Results
# =============================================================================

class Success(BaseModel):
    """The provider returned usable text."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    text: str = Field(min_length=1)


class EmptyResponse(BaseModel):
    """The provider answered but produced no text."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["empty_response"] = "empty_response"


class ProviderError(BaseModel):
    """The provider call failed. `message` is for logs only."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["provider_error"] = "provider_error"
    message: str


ModelInvocationResult = Annotated[
    Union[Success, EmptyResponse, ProviderError],
    Field(discriminator="kind"),
]


# =============================================================================
# Review Results
# =============================================================================

class ReviewResult(BaseModel):
    """
    Outcome of a review as returned to the HTTP boundary.

    Serializes to `{"ok": true, "text": ...}` or `{"ok": false, "message": ...}`
    when dumped with `exclude_none=True`.
    """
    model_config = ConfigDict(frozen=True)

    ok: bool
    text: Optional[str] = None
    message: Optional[str] = None
    failure: Optional[ReviewFailure] = Field(default=None, exclude=True)

    @classmethod
    def completed(cls, text: str) -> "ReviewResult":
        """Build a successful result."""
        return cls(ok=True, text=text)

    @classmethod
    def failed(cls, failure: ReviewFailure) -> "ReviewResult":
        """Build a failed result carrying the public message for `failure`."""
        return cls(ok=False, message=FAILURE_MESSAGES[failure], failure=failure)

    @property
    def state(self) -> ReviewState:
        """Terminal state reached by the call that produced this result."""
        if self.ok:
            return ReviewState.COMPLETED
        if self.failure == ReviewFailure.INVALID_INPUT:
            return ReviewState.REJECTED
        return ReviewState.FAILED

    def to_response(self) -> dict:
        """Public JSON shape, without internal classification."""
        return self.model_dump(exclude_none=True)
