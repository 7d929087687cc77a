"""Application settings via Pydantic BaseSettings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Shared secret for the privileged confirmation path (required)
    secret_phrase: str

    # Store
    store_backend: Literal["redis", "memory"] = "redis"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str | None = None
    redis_db: int = 0
    memory_max_entries: int = 10000

    # Server
    listen_addr: str = "0.0.0.0"  # nosec B104
    listen_port: int = 8080
    cert_path: str | None = None
    key_path: str | None = None

    # App
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("secret_phrase")
    @classmethod
    def _secret_not_empty(cls, value: str) -> str:
        if not value:
            msg = "SECRET_PHRASE must not be empty"
            raise ValueError(msg)
        return value

    @property
    def tls_enabled(self) -> bool:
        return bool(self.cert_path and self.key_path)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()  # type: ignore[call-arg]
