"""Configuration module with YAML and environment variable support."""

from .settings import (
    DEFAULT_BASE_URL,
    AppSettings,
    CatalogSettings,
    LoggingSettings,
    Settings,
    get_settings,
)


__all__ = [
    "DEFAULT_BASE_URL",
    "AppSettings",
    "CatalogSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
