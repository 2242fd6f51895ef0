"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from triglot import __version__
from triglot.config import settings
from triglot.api.errors import request_validation_handler
from triglot.api.v1.routes import languages, translation

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    if not settings.resolved_api_key:
        logger.warning(
            "No LLM API key configured (LLM_API_KEY / ANTHROPIC_API_KEY); "
            "relying on provider defaults from the environment"
        )
    logger.info("Server running at http://localhost:%d", settings.port)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Sentence-aligned translation between Classical Chinese, Modern Chinese and English",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)

# Include routers
app.include_router(translation.router, prefix="/api", tags=["translation"])
app.include_router(languages.router, prefix="/api", tags=["languages"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Triglot Translator API", "version": __version__}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def run():
    """Run the API server with uvicorn."""
    import uvicorn

    uvicorn.run("triglot.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()
