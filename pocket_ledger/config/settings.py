"""
Configuration Management for Pocket Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


STORAGE_BACKENDS = ("memory", "json_file", "google_sheets")


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
    pass


class LedgerSettings(BaseSettings):
    """Ledger behaviour: currency label, storage backend, collection names."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    currency_code: str = Field(
        default="INR",
        min_length=3,
        max_length=3,
        description="Three-letter code shown next to amounts (display only)"
    )
    storage_backend: str = Field(
        default="json_file",
        description="One of: memory, json_file, google_sheets"
    )
    data_file: str = Field(
        default="ledger_data.json",
        description="Path of the JSON document used by the json_file backend"
    )
    expenses_collection: str = Field(
        default="expenses",
        description="Storage key of the expense collection"
    )
    income_collection: str = Field(
        default="income",
        description="Storage key of the income collection"
    )
    report_title: str = Field(
        default="Ledger Report",
        max_length=80,
        description="Heading used for exported reports"
    )

    @field_validator("currency_code")
    @classmethod
    def normalize_currency_code(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        backend = v.strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend: {v}. Allowed: {', '.join(STORAGE_BACKENDS)}"
            )
        return backend

    @property
    def data_path(self) -> Path:
        return Path(self.data_file).expanduser()


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )

    # Sheet names within the spreadsheet
    ledger_sheet_name: str = Field(
        default="Ledger",
        description="Worksheet holding one row per collection"
    )
    audit_sheet_name: str = Field(
        default="AuditLog",
        description="Worksheet for audit events"
    )

    @field_validator("credentials_path")
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


class AppSettings(BaseSettings):
    """Process-level settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Log debug-level audit events"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Sub-settings are loaded lazily so that a memory-backed ledger does not
    need Google credentials in the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings(settings: Optional[Settings] = None) -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus `<name>_error` entries
    describing each failure. Google Sheets settings are only checked when
    that backend is selected.
    """
    results = {}
    settings = settings or get_settings()

    try:
        ledger = settings.ledger
        results["ledger"] = True
    except Exception as e:
        ledger = None
        results["ledger"] = False
        results["ledger_error"] = str(e)

    if ledger is not None and ledger.storage_backend == "google_sheets":
        try:
            _ = settings.google_sheets
            results["google_sheets"] = True
        except Exception as e:
            results["google_sheets"] = False
            results["google_sheets_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
