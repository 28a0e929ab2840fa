"""Application settings using Pydantic."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gmail OAuth
    gmail_client_id: Optional[str] = Field(
        default=None,
        description="OAuth client ID for the Gmail API",
    )
    gmail_client_secret: Optional[str] = Field(
        default=None,
        description="OAuth client secret for the Gmail API",
    )
    gmail_redirect_uri: str = Field(
        default="http://localhost:3000/oauth2callback",
        description="OAuth redirect URI registered for the client",
    )
    gmail_refresh_token: Optional[str] = Field(
        default=None,
        description="Long-lived refresh token for the tracked mailbox",
    )
    gmail_token_file: str = Field(
        default="token.json",
        description="Path to a cached OAuth token file",
    )
    processed_label: str = Field(
        default="JobTracker/Processed",
        description="Gmail label applied to processed messages",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///job_tracker.db",
        description="SQLAlchemy database URL",
    )

    # Scheduler
    cron_schedule: str = Field(
        default="*/15 * * * *",
        description="Crontab expression for recurring email checks",
    )
    initial_lookback_hours: int = Field(
        default=168,
        ge=1,
        description="How far back the first run looks for emails (hours)",
    )
    state_file: Path = Field(
        default=Path("state.json"),
        description="File holding the last processed timestamp",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a rotating log file",
    )


# Global settings instance
settings = Settings()
