"""
Engine settings.

Defaults used when a business document does not carry a value. Every
setting can be overridden through the environment with the SALON_ prefix
(e.g. SALON_DEFAULT_MIN_NOTICE_HOURS=12).
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Fallback values for booking policy resolution and logging"""

    DEFAULT_MIN_NOTICE_HOURS: float = Field(default=24, ge=0)
    DEFAULT_MAX_ADVANCE_DAYS: int = Field(default=90, ge=0)
    DEFAULT_BOOKING_INTERVAL: int = Field(default=15, gt=0)  # minutes
    DEFAULT_SERVICE_DURATION: int = Field(default=60, gt=0)  # minutes
    DEFAULT_BUFFER_MINUTES: int = Field(default=0, ge=0)
    DEFAULT_TIMEZONE: str = Field(default="UTC")

    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="SALON_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance"""
    return EngineSettings()
