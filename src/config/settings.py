"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stock_ledger.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class LedgerSettings(BaseSettings):
    """Stock ledger and reporting configuration."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    # Operating time used for "today" boundaries on the dashboard
    timezone: str = "UTC"
    tenant_timezones: dict[int, str] = Field(default_factory=dict)

    high_value_threshold: Decimal = Decimal("1000")
    low_stock_factor: Decimal = Decimal("1.2")

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("tenant_timezones")
    @classmethod
    def check_tenant_timezones(cls, v: dict[int, str]) -> dict[int, str]:
        for tenant_id, name in v.items():
            try:
                ZoneInfo(name)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone for tenant {tenant_id}: {name}") from e
        return v

    def zone_for(self, tenant_id: int) -> ZoneInfo:
        """Operating timezone of a tenant."""
        return ZoneInfo(self.tenant_timezones.get(tenant_id, self.timezone))


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stock Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create global settings instance.

    Raises:
        ConfigurationError: If the environment holds an invalid value
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
