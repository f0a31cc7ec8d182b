"""Pipeline Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can come from a CLEANFLOW_* environment variable or .env
    - get_settings() is cached (lru_cache): single instance per process
    - Settings are read-only after load; ResponseConfig is derived from them once

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - Defaults for everything: the pipeline works with no configuration at all
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pipeline settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLEANFLOW_", env_file=".env", case_sensitive=False,
        extra="ignore",
    )

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    # Requests
    request_timeout_seconds: float | None = None
    request_id_header: str = "x-request-id"

    # Responses: JSON in env, e.g. CLEANFLOW_RESPONSE_HEADERS='{"x-api": ["v1"]}'
    response_headers: dict[str, list[str]] = {}
    fallback_payload: str | None = None

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def check_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
