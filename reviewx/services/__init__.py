"""
Services Package

This package contains the review pipeline:
- prompt_policy: Reviewer system instruction
- model_client: Gemini invocation
- review_service: Validation, invocation and result mapping
"""

from reviewx.services.model_client import ModelClient
from reviewx.services.prompt_policy import PromptPolicy
from reviewx.services.review_service import ReviewService


__all__ = [
    "ModelClient",
    "PromptPolicy",
    "ReviewService",
]
