from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .metrics import DEFAULT_PROGRESS_INTERVAL
from .timebase import GPS_UNIX_EPOCH_DELTA, resolve_timezone


class Settings(BaseSettings):
    """Converter configuration sourced from ``NCOM_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="NCOM_", env_file=".env", extra="ignore")

    epoch_delta: float = Field(default=GPS_UNIX_EPOCH_DELTA)
    progress_interval: int = Field(default=DEFAULT_PROGRESS_INTERVAL)
    timezone: str = Field(default="utc")
    decoder: str = Field(default="simulated_v1")
    read_chunk_size: int = Field(default=65536)
    log_level: str = Field(default="INFO")
    json_logs: bool | None = Field(default=None)

    @field_validator("progress_interval", "read_chunk_size", mode="after")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("timezone", mode="before")
    @classmethod
    def _normalize_timezone(cls, value: Any) -> Any:
        if isinstance(value, str):
            trimmed = value.strip()
            if trimmed.lower() in ("utc", "local"):
                return trimmed.lower()
            return trimmed or "utc"
        return value

    @field_validator("decoder", mode="before")
    @classmethod
    def _normalize_decoder(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("json_logs", mode="before")
    @classmethod
    def _blank_is_auto(cls, value: Any) -> Any:
        if value in ("", None):
            return None
        return value

    def tzinfo(self):
        return resolve_timezone(self.timezone)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
