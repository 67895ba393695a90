"""Application settings.

All values are read from the environment (or an optional ``.env`` file)
by Pydantic Settings. Defaults are safe for local development.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expa_analytics.core.config.enums import Environment


class Settings(BaseSettings):
    """Settings for the analytics dispatcher and its integrations.

    Attributes:
        ENVIRONMENT: Deployment environment.
        LOG_LEVEL: Root log level for the package loggers.
        LOCAL_DEVELOPMENT: Use human-readable log lines instead of key=value dimensions.
        ANALYTICS_ENABLED: Master switch for every integration.
        EXPA_ENABLED: Whether the Expa integration is registered.
        EXPA_API_URL: Endpoint that receives Expa batches.
        EXPA_REQUEST_TIMEOUT_SECONDS: Timeout for a single batch request.
        EXPA_MAX_QUEUE_SIZE: Upper bound on buffered messages before the oldest is dropped.
        POSTHOG_API_KEY: PostHog project key. Empty disables the PostHog integration.
        POSTHOG_HOST: PostHog ingestion host.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    ENVIRONMENT: Environment = Environment.LOCAL
    LOG_LEVEL: str = "INFO"
    LOCAL_DEVELOPMENT: bool = False

    ANALYTICS_ENABLED: bool = True

    EXPA_ENABLED: bool = True
    EXPA_API_URL: str = "https://api.expa.com/v1/import"
    EXPA_REQUEST_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    EXPA_MAX_QUEUE_SIZE: int = Field(default=1000, gt=0)

    POSTHOG_API_KEY: Optional[str] = None
    POSTHOG_HOST: str = "https://app.posthog.com"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def posthog_enabled(self) -> bool:
        """PostHog is only used outside local runs and when a key is configured."""
        return (
            self.ANALYTICS_ENABLED
            and bool(self.POSTHOG_API_KEY)
            and self.ENVIRONMENT != Environment.LOCAL
        )
