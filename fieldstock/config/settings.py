"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StockSettings(BaseSettings):
    """Stock tracking and alerting configuration."""

    model_config = SettingsConfigDict(env_prefix="STOCK_")

    # Alerting
    default_low_stock_threshold: int = 5

    # Balance arithmetic
    balance_epsilon: float = 0.0001
    balance_round_digits: int = 4

    # Unit labels used when the catalog has nothing better
    default_unit: str = "Unit"
    default_container_unit: str = "Hasbal"
    default_base_unit: str = "Meter"
    default_measurement_capacity: float = 1000.0

    # Legacy fragment convention (only read at the backend boundary)
    fragment_id_marker: str = "-PART-"
    fragment_name_suffix: str = " (Potongan)"

    @field_validator("balance_epsilon")
    @classmethod
    def epsilon_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("balance_epsilon must be positive")
        return v


class HandoverSettings(BaseSettings):
    """Handover document configuration."""

    model_config = SettingsConfigDict(env_prefix="HANDOVER_")

    warehouse_location: str = "Gudang Inventori"
    loan_reference_prefixes: list[str] = ["RL-", "LREQ-"]
    request_reference_prefixes: list[str] = ["RO-", "REQ-"]

    # Condition notes written on generated lines
    procured_condition: str = "Baru (Pengadaan)"
    shortfall_condition: str = "Ambil dari Stok Gudang"
    installation_material_condition: str = "Material Instalasi"
    repaired_condition: str = "Selesai Perbaikan"
    default_condition: str = "Baik"
    loan_default_condition: str = "Kondisi baik"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "FieldStock"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    stock: StockSettings = Field(default_factory=StockSettings)
    handover: HandoverSettings = Field(default_factory=HandoverSettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
