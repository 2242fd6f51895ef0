from triglot.core.translation.errors import (
    AttemptTimeout,
    EmptyResult,
    ErrorCategory,
    GenerationFailure,
    RateLimited,
    ValidationError,
    classify_failure,
)


class RateLimitError(Exception):
    """Same class name LiteLLM uses for provider 429s."""


def test_validation():
    assert classify_failure(ValidationError("Text is required")) is ErrorCategory.VALIDATION


def test_timeout_cause():
    assert classify_failure(GenerationFailure(AttemptTimeout(30))) is ErrorCategory.TIMEOUT


def test_timeout_in_upstream_message():
    failure = GenerationFailure(RuntimeError("Request timeout from upstream"))
    assert classify_failure(failure) is ErrorCategory.TIMEOUT


def test_rate_limit_by_message_and_type():
    assert classify_failure(GenerationFailure(RuntimeError("HTTP 429"))) is ErrorCategory.RATE_LIMITED
    assert classify_failure(GenerationFailure(RateLimitError("slow down"))) is ErrorCategory.RATE_LIMITED
    assert classify_failure(RateLimited(RuntimeError("x"))) is ErrorCategory.RATE_LIMITED


def test_empty_and_generic():
    assert classify_failure(GenerationFailure(EmptyResult())) is ErrorCategory.EMPTY_RESULT
    assert classify_failure(GenerationFailure(RuntimeError("boom"))) is ErrorCategory.GENERATION_FAILED


def test_attempt_timeout_message():
    assert str(AttemptTimeout(30.0)) == "Translation timeout after 30 seconds"
