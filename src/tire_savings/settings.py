"""Runtime settings — read from ``TIRE_SAVINGS_*`` environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tire_savings.config.percentages import (
    DEFAULT_CARCASS_SAVINGS_PCT,
    DEFAULT_CPK_IMPROVEMENT_PCT,
    DEFAULT_FUEL_SAVINGS_PCT,
    SavingsPercentages,
)


class Settings(BaseSettings):
    """Deployment settings for the API and dashboard."""

    model_config = SettingsConfigDict(env_prefix="TIRE_SAVINGS_", env_file=".env", extra="ignore")

    # --- Default percentages handed to the engine ---
    fuel_savings_pct: float = Field(default=DEFAULT_FUEL_SAVINGS_PCT, ge=0, le=100)
    cpk_improvement_pct: float = Field(default=DEFAULT_CPK_IMPROVEMENT_PCT, ge=0, le=100)
    carcass_savings_pct: float = Field(default=DEFAULT_CARCASS_SAVINGS_PCT, ge=0, le=100)

    # --- API server ---
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    def percentages(self) -> SavingsPercentages:
        return SavingsPercentages(
            fuel_savings_pct=self.fuel_savings_pct,
            cpk_improvement_pct=self.cpk_improvement_pct,
            carcass_savings_pct=self.carcass_savings_pct,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | int = "INFO") -> None:
    """Set up root logging for the API process."""
    logging.basicConfig(
        level=level.upper() if isinstance(level, str) else level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
