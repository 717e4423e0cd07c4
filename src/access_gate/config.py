"""Application configuration via pydantic-settings.

Reads from .env file or environment variables. All settings are validated
at startup — if the gate cannot be built from them, the app fails fast with
a clear error message.

Usage:
    from access_gate.config import get_settings
    settings = get_settings()
    print(settings.gate_variant)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the Access Gate."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = True
    app_log_level: str = "DEBUG"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # --- Gate ---
    gate_variant: Literal["secure", "simple"] = "secure"
    # Creator of the gate; becomes the first Administrator.
    gate_administrator: str = ""
    gate_recipient: str = ""
    # Ledger account of the gate itself. Generated when empty.
    gate_address: str = ""
    gate_default_price: int = 10**16  # 0.01 ether in wei
    gate_clear_pending_on_accept: bool = False

    # --- Listener ---
    listener_enabled: bool = True
    listener_timezone: str | None = None

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
