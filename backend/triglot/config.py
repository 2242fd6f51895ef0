"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Triglot Translator"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    frontend_port: int = 5173

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # Authentication (optional - for network-exposed deployments)
    # Set API_AUTH_TOKEN to enable authentication on the translation endpoints
    api_auth_token: Optional[str] = None
    # If True, require auth on all endpoints; if False, auth is not enforced
    require_auth_all: bool = False

    # LLM provider (routed through LiteLLM)
    llm_provider: str = "anthropic"
    default_model: str = "claude-3-opus-20240229"
    fast_model: str = "claude-3-5-sonnet-20240620"
    llm_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None
    temperature: float = 0.3
    max_tokens: int = 4096

    # Translation retry settings
    max_attempts: int = 3
    attempt_timeout_seconds: float = 30.0
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 5.0

    # Follow-up questions about a translated document
    query_max_attempts: int = 1
    query_timeout_seconds: float = 120.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Build CORS origins based on frontend port
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
                f"http://localhost:{self.port}",
            ]

    @property
    def resolved_api_key(self) -> Optional[str]:
        """API key handed to the LLM provider."""
        return self.llm_api_key or self.anthropic_api_key


settings = Settings()
