"""Translation error taxonomy.

Per-attempt errors (AttemptTimeout, EmptyResult) are recovered by retrying
inside the invoker and never reach callers on their own. Callers see either a
ValidationError (raised before any generator call) or a GenerationFailure
(all attempts exhausted) carrying the last observed cause.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .pipeline.invoker import RetryState


RATE_LIMIT_MARKERS = ("rate limit", "rate_limit", "ratelimit", "too many requests", "429")


class ErrorCategory(str, Enum):
    """Stable, machine-checkable error categories exposed to clients."""

    VALIDATION = "validation_error"
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    EMPTY_RESULT = "empty_result"
    GENERATION_FAILED = "generation_failed"
    QUERY_FAILED = "query_failed"


class TranslatorError(Exception):
    """Base class for all translation errors."""


class ValidationError(TranslatorError):
    """A required request field is missing or empty."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AttemptError(TranslatorError):
    """A single generator attempt failed."""


class AttemptTimeout(AttemptError):
    """The attempt did not finish within its time budget."""

    def __init__(self, timeout_seconds: float):
        super().__init__(f"Translation timeout after {timeout_seconds:g} seconds")
        self.timeout_seconds = timeout_seconds


class EmptyResult(AttemptError):
    """The generator finished without producing any text."""

    def __init__(self, message: str = "No translation result received from the generator"):
        super().__init__(message)


class GenerationFailure(TranslatorError):
    """All attempts were exhausted."""

    def __init__(self, cause: BaseException, state: Optional["RetryState"] = None):
        attempts = state.attempt if state is not None else None
        suffix = f" after {attempts} attempt(s)" if attempts else ""
        super().__init__(f"Generation failed{suffix}: {cause}")
        self.cause = cause
        self.state = state


class RateLimited(GenerationFailure):
    """Generation failed because the upstream service is rate limiting."""


def is_rate_limit_error(exc: BaseException) -> bool:
    """Check whether an exception looks like upstream rate limiting."""
    if type(exc).__name__ == "RateLimitError":
        return True
    message = str(exc).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def classify_failure(exc: BaseException) -> ErrorCategory:
    """Map an exception raised by the pipeline to an error category."""
    if isinstance(exc, ValidationError):
        return ErrorCategory.VALIDATION

    cause = exc.cause if isinstance(exc, GenerationFailure) else exc

    if isinstance(exc, RateLimited) or is_rate_limit_error(cause):
        return ErrorCategory.RATE_LIMITED
    if isinstance(cause, AttemptTimeout) or "timeout" in str(cause).lower():
        return ErrorCategory.TIMEOUT
    if isinstance(cause, EmptyResult):
        return ErrorCategory.EMPTY_RESULT
    return ErrorCategory.GENERATION_FAILED
