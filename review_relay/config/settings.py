"""Application settings using Pydantic Settings for environment variable management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Persistence Configuration
    database_url: str = Field(
        default="postgresql://postgres@localhost:5432/review_relay_dev",
        description="SQLAlchemy database URL for processed records and the identity map",
    )
    database_access_key: str | None = Field(
        default=None,
        description="Database password; injected into DATABASE_URL when set",
    )

    # Chat Webhook Configuration
    slack_webhook_url: str | None = Field(
        default=None, description="Incoming webhook URL notifications are posted to"
    )
    webhook_timeout_seconds: float | None = Field(
        default=None,
        description="Timeout for the outbound webhook call (unset waits indefinitely)",
    )

    # Inbound Authentication
    relay_secret: str | None = Field(
        default=None,
        description="Shared secret callers must send in the credential header",
    )
    relay_secret_header: str = Field(
        default="X-Relay-Secret", description="Header carrying the shared secret"
    )

    # Relay Behaviour
    require_category: bool = Field(
        default=False,
        description="Reject review requests that do not carry a category",
    )
    maintenance_mode: bool = Field(
        default=False,
        description="Answer every relay request with a maintenance notice",
    )

    # Observability
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )

    # Application Settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    # Server Configuration
    # Use a localhost default to avoid binding to all interfaces.
    # Override via env (e.g., HOST=0.0.0.0) only when needed (containers/proxies).
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    def missing_required(self) -> list[str]:
        """Return the names of required variables that are not configured."""
        missing = []
        if not self.slack_webhook_url:
            missing.append("SLACK_WEBHOOK_URL")
        if not self.relay_secret:
            missing.append("RELAY_SECRET")
        url = make_url(self.database_url)
        if (
            not self.database_access_key
            and url.password is None
            and url.get_backend_name() != "sqlite"
        ):
            missing.append("DATABASE_ACCESS_KEY")
        return missing


# Global settings instance
settings = Settings()

# Validate required secrets in production to avoid silent failures
if settings.is_production:
    missing = settings.missing_required()
    if missing:
        raise RuntimeError(
            "Missing required environment variables for production: "
            + ", ".join(missing)
        )
