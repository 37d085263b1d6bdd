"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Quiz Roster Reconciler"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Result store (Turso/libSQL)
    database_url: str | None = Field(default=None)
    database_auth_token: str | None = Field(default=None)

    # Quiz session
    session_duration_seconds: int = Field(
        default=1800,
        gt=0,
        description="Length of one quiz session in seconds",
    )
    tick_interval_seconds: int = Field(
        default=1,
        gt=0,
        description="Seconds between countdown ticks",
    )
    warning_thresholds_seconds: list[int] = Field(
        default_factory=lambda: [300, 60],
        description="Remaining-time values that raise a one-shot warning",
    )

    # Static data sources
    roster_path: str | None = Field(
        default=None, description="JSON or CSV file with the class roster"
    )
    roster_spreadsheet_id: str | None = Field(
        default=None, description="Google Sheet holding the class roster"
    )
    roster_sheet_name: str = Field(default="Roster")
    google_sheets_credentials: str | None = Field(
        default=None, description="Service account JSON for Google Sheets"
    )
    answer_key_path: str | None = Field(
        default=None, description="JSON file mapping question id to answer"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
