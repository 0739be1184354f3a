"""
Configuration module - Centralized settings management.

Usage:
    from lightning_e2e.config import get_settings, load_config
    
    settings = get_settings()
    settings = load_config(timeouts={"toast_ms": 5000})

Environment Variables:
    SF_BASE_URL=https://myorg.lightning.force.com
    SF_USERNAME=qa@example.com
    SF_PASSWORD=...
    LIGHTNING_E2E__TIMEOUTS__TOAST_MS=20000
    LIGHTNING_E2E__BROWSER__HEADLESS=false
"""

from lightning_e2e.config.settings import (
    Settings,
    SalesforceSettings,
    TimeoutSettings,
    BrowserSettings,
    ReportingSettings,
    LoggingSettings,
)
from lightning_e2e.config.loader import ConfigLoader, load_config

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).
    
    Call reset_settings() to reload.
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "SalesforceSettings",
    "TimeoutSettings",
    "BrowserSettings",
    "ReportingSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
