"""
Review Routes Module

This module defines the FastAPI endpoint that accepts a code snippet
and returns the AI review.

Design Decisions:
- Parse the body by hand so a malformed payload is reported as invalid input
- Status code follows the failure classification of the result
- The response body is always the public ReviewResult shape
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from reviewx.logging_config import get_logger
from reviewx.models import ReviewFailure, ReviewRequest
from reviewx.services.review_service import ReviewService

logger = get_logger(__name__)

router = APIRouter(prefix="/ai", tags=["review"])

FAILURE_STATUS_CODES = {
    ReviewFailure.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ReviewFailure.EMPTY_RESPONSE: status.HTTP_502_BAD_GATEWAY,
    ReviewFailure.PROVIDER_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_review_service(request: Request) -> ReviewService:
    """Return the service created during application startup."""
    return request.app.state.review_service


async def _read_code(request: Request) -> Any:
    """Extract `code` from the JSON body, or None if the body is unusable."""
    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning("Failed to parse review payload", error=str(e))
        return None

    if not isinstance(payload, dict):
        logger.warning(
            "Review payload is not a JSON object",
            payload_type=type(payload).__name__
        )
        return None

    return ReviewRequest.model_validate(payload).code


@router.post("/get-review")
async def get_review(
    request: Request,
    service: ReviewService = Depends(get_review_service)
) -> JSONResponse:
    """
    Review a code snippet.

    Expects a JSON body of the form `{"code": "..."}`.

    Returns:
        200 with `{"ok": true, "text": ...}` on success, otherwise
        400/502/503 with `{"ok": false, "message": ...}`
    """
    code = await _read_code(request)
    result = await service.review_code(code)

    if result.ok:
        status_code = status.HTTP_200_OK
    else:
        status_code = FAILURE_STATUS_CODES[result.failure]

    logger.info(
        "Review request finished",
        state=result.state.value,
        status_code=status_code
    )

    return JSONResponse(status_code=status_code, content=result.to_response())
