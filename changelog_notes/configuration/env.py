"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from changelog_notes.constants import DEFAULT_HOST


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # Repository settings
    CHANGELOG_HOST: str = DEFAULT_HOST
    REPO: str | None = None

    # Issue tracker settings
    TRACKER_URL: str | None = None
    TRACKER_LIST: str | None = None
