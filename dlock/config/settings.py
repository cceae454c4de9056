# dlock/config/settings.py

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dlock.domain.options import Options


class LockSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DLOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Redis ---
    redis_url: str = "redis://localhost:6379/0"

    # --- Lock defaults (seconds) ---
    retries_count: int = 0
    lock_timeout: float = Field(default=5.0, description="TTL of the lock key")
    wait_retry: float = 0.1
    wait_timeout: float = 0.0

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    def lock_options(self) -> Options:
        return Options(
            retries_count=self.retries_count,
            lock_timeout=self.lock_timeout,
            wait_retry=self.wait_retry,
            wait_timeout=self.wait_timeout,
        ).normalized()


@lru_cache
def get_settings() -> LockSettings:
    return LockSettings()
