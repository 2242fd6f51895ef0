"""Error envelopes for the HTTP API.

Every failure is reported as ``{error, details, timestamp}`` where ``error``
is a stable category clients can branch on.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from triglot.core.translation.errors import ErrorCategory, classify_failure

logger = logging.getLogger(__name__)

STATUS_BY_CATEGORY = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.TIMEOUT: 504,
    ErrorCategory.RATE_LIMITED: 429,
}

MESSAGES = {
    ErrorCategory.TIMEOUT: (
        "Translation timed out. Please try again with shorter text or select "
        "fewer output languages."
    ),
    ErrorCategory.RATE_LIMITED: "Too many requests. Please wait a moment and try again.",
    ErrorCategory.EMPTY_RESULT: "The model did not return a translation. Please try again.",
    ErrorCategory.GENERATION_FAILED: "Translation failed.",
    ErrorCategory.QUERY_FAILED: "Query failed.",
}


def error_body(category: ErrorCategory, details: str) -> Dict[str, Any]:
    return {
        "error": category.value,
        "details": details or "Unknown error occurred",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def error_response(status_code: int, category: ErrorCategory, details: str) -> JSONResponse:
    """Build a JSON error response."""
    return JSONResponse(status_code=status_code, content=error_body(category, details))


def failure_response(exc: BaseException) -> JSONResponse:
    """Map a pipeline exception to its status code and envelope."""
    category = classify_failure(exc)
    status_code = STATUS_BY_CATEGORY.get(category, 500)
    message = MESSAGES.get(category)
    details = f"{message} {exc}" if message else str(exc)
    return error_response(status_code, category, details)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 instead of FastAPI's 422."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}")
    problems = "; ".join(parts)
    logger.warning(f"Rejected request to {request.url.path}: {problems}")
    return error_response(400, ErrorCategory.VALIDATION, problems or "Invalid request body")
