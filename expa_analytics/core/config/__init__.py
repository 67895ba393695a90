"""Configuration module for the Expa analytics integration.

Provides centralized configuration management with type-safe enums.

Usage:
    from expa_analytics.core.config import settings, Environment

    # Access settings
    api_url = settings.EXPA_API_URL

    # Use enums for type safety
    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from expa_analytics.core.config.enums import Environment
from expa_analytics.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
