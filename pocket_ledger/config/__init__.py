"""Configuration package."""

from pocket_ledger.config.settings import (
    STORAGE_BACKENDS,
    AppSettings,
    ConfigurationError,
    GoogleSheetsSettings,
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "STORAGE_BACKENDS",
    "AppSettings",
    "ConfigurationError",
    "GoogleSheetsSettings",
    "LedgerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
