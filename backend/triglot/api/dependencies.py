"""API dependencies for pipeline wiring and optional authentication.

This module provides:
- The shared TranslationPipeline (stateless, safe across concurrent requests)
- Optional API token authentication for network-exposed deployments
"""

import logging
import secrets
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException

from triglot.config import settings
from triglot.core.translation.pipeline import (
    GatewayFactory,
    PipelineConfig,
    TranslationPipeline,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Pipeline Dependencies
# =============================================================================


@lru_cache(maxsize=1)
def get_pipeline() -> TranslationPipeline:
    """Build the translation pipeline from settings on first use."""
    config = PipelineConfig(
        max_attempts=settings.max_attempts,
        attempt_timeout_seconds=settings.attempt_timeout_seconds,
        backoff_base_seconds=settings.backoff_base_seconds,
        backoff_max_seconds=settings.backoff_max_seconds,
        query_max_attempts=settings.query_max_attempts,
        query_timeout_seconds=settings.query_timeout_seconds,
    )
    logger.info(
        "Building translation pipeline: provider=%s, max_attempts=%d, timeout=%ss",
        settings.llm_provider,
        config.max_attempts,
        config.attempt_timeout_seconds,
    )
    return TranslationPipeline(GatewayFactory.create(settings), config)


# =============================================================================
# Authentication
# =============================================================================


def _presented_token(authorization: Optional[str], x_api_key: Optional[str]) -> Optional[str]:
    """Pick the token from ``Authorization: Bearer`` or ``X-API-Key``."""
    scheme, _, credentials = (authorization or "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return x_api_key or None


async def require_api_token(
    authorization: Annotated[Optional[str], Header()] = None,
    x_api_key: Annotated[Optional[str], Header(alias="X-API-Key")] = None,
) -> bool:
    """Reject callers without the configured API token.

    A deployment without API_AUTH_TOKEN is open.

    Raises:
        HTTPException: 401 when the token is missing or wrong
    """
    expected = settings.api_auth_token
    if not expected:
        return True

    token = _presented_token(authorization, x_api_key)
    if token is None or not secrets.compare_digest(token.encode(), expected.encode()):
        logger.warning("Rejected request with %s API token", "invalid" if token else "missing")
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid API token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return True


async def require_api_token_if_enabled(
    authorization: Annotated[Optional[str], Header()] = None,
    x_api_key: Annotated[Optional[str], Header(alias="X-API-Key")] = None,
) -> bool:
    """Apply the token check to translation routes when REQUIRE_AUTH_ALL is set."""
    if settings.require_auth_all:
        return await require_api_token(authorization, x_api_key)
    return True


OptionalAuth = Annotated[bool, Depends(require_api_token_if_enabled)]
Pipeline = Annotated[TranslationPipeline, Depends(get_pipeline)]
