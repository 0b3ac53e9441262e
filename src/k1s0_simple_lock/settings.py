"""Settings models (pydantic BaseModel)."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .config import DEFAULT_KEY_PREFIX, LockConfig


class LockSection(BaseModel):
    """Lock retry and namespace settings."""

    retry_count: int = Field(default=3, ge=0)
    retry_delay: int = Field(default=200, ge=0)
    retry_jitter: int = Field(default=50, ge=0)
    key_prefix: str = DEFAULT_KEY_PREFIX

    def to_config(self) -> LockConfig:
        return LockConfig(
            retry_count=self.retry_count,
            retry_delay=self.retry_delay,
            retry_jitter=self.retry_jitter,
            key_prefix=self.key_prefix,
        )


class RedisSection(BaseModel):
    """Redis connection settings. url, when set, takes precedence over host/port."""

    url: str | None = None
    host: str = "localhost"
    port: int = Field(default=6379, ge=1, le=65535)
    password: str = ""
    db: int = Field(default=0, ge=0)


class SimpleLockSettings(BaseModel):
    """Complete simple_lock settings."""

    lock: LockSection = Field(default_factory=LockSection)
    redis: RedisSection = Field(default_factory=RedisSection)
