"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from shared.config import settings

    print(settings.environment)
    print(settings.epa.api_base_url)
"""

from shared.config.settings import (
    EPASettings,
    Environment,
    LogLevel,
    LookupSettings,
    Settings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "EPASettings",
    "LookupSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
]
