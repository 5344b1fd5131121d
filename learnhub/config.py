"""
Client configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Remote authority
    api_base_url: str = "http://localhost:5000"
    request_timeout_seconds: float = 15.0

    # Session (written by the sign-in flow, read-only here)
    session_file: str = ".learnhub/session.json"

    # Navigation targets
    sign_in_path: str = "/auth"
    admin_home_path: str = "/admin"
    learner_home_path: str = "/learning-dashboard"
    root_path: str = "/"

    # Access & progression policy
    enrollment_failure_policy: str = "fail_open"  # fail_open | fail_closed
    notification_poll_interval_seconds: float = 30.0

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    project_name: str = "LearnHub Client"
    version: str = "1.0.0"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
