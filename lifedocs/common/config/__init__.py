"""Configuration management for LifeDocs.

Loads environment variables using pydantic-settings for type-safe configuration.
Repository backend selection, external service URLs, credentials, and pipeline
timeouts are defined here.
"""

import os
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_LOADED = False
_ENV_LOCK = Lock()


def _resolve_env_file() -> str | None:
    """Locate the .env file regardless of the current working directory.

    Preference order:
        1. LIFEDOCS_ENV_FILE environment variable (explicit override)
        2. Current working directory (common for local runs)
        3. Ancestors of this file (covers package execution within Docker)
    """
    override = os.getenv("LIFEDOCS_ENV_FILE")
    if override:
        override_path = Path(override).expanduser()
        if override_path.is_file():
            return str(override_path)

    cwd_candidate = Path.cwd() / ".env"
    if cwd_candidate.is_file():
        return str(cwd_candidate)

    for parent in Path(__file__).resolve().parents:
        candidate = parent / ".env"
        if candidate.is_file():
            return str(candidate)

    return None


_DEFAULT_ENV_FILE = _resolve_env_file()


def ensure_env_loaded() -> None:
    """Load environment variables from disk exactly once."""
    global _ENV_LOADED

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        env_path = _DEFAULT_ENV_FILE or _resolve_env_file()
        if env_path:
            load_dotenv(env_path, override=False)

        _ENV_LOADED = True


ensure_env_loaded()


class LifeDocsConfig(BaseSettings):
    """Main configuration class for LifeDocs.

    Loads backend selection, service URLs, credentials, and tuning parameters
    from environment variables. Uses pydantic-settings for validation and type safety.
    """

    model_config = SettingsConfigDict(
        env_file=_DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== Storage ==========
    repository_backend: Literal["memory", "postgres"] = "memory"

    postgres_user: str = "lifedocs"
    postgres_password: SecretStr = SecretStr("changeme")
    postgres_db: str = "lifedocs"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_min_pool_size: int = Field(default=1, ge=1)
    postgres_max_pool_size: int = Field(default=10, ge=1)
    postgres_checkout_timeout: float = Field(default=30.0, gt=0)  # seconds waiting for a slot

    # ========== OCR (tesseract-server) ==========
    tesseract_url: str = "http://localhost:8884"
    tesseract_languages: list[str] = ["eng"]

    # ========== Summarization (Ollama) ==========
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama2"
    summary_char_max_length: int = Field(default=200, ge=1)
    title_word_limit: int = Field(default=10, ge=1)

    # ========== Ingestion Pipeline Tuning ==========
    extraction_timeout: float = Field(default=60.0, gt=0)
    summarization_timeout: float = Field(default=120.0, gt=0)
    external_max_attempts: int = Field(default=1, ge=1, le=10)  # 1 = no retries

    # ========== Listing ==========
    page_size: int = Field(default=100, ge=1, le=1000)

    # ========== Observability ==========
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log_level: {value}")
        return normalized

    @field_validator("tesseract_url", "ollama_host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _validate_pool_bounds(self) -> "LifeDocsConfig":
        if self.postgres_min_pool_size > self.postgres_max_pool_size:
            raise ValueError("postgres_min_pool_size cannot exceed postgres_max_pool_size")
        return self


@lru_cache(maxsize=1)
def get_config() -> LifeDocsConfig:
    """Return cached Settings instance (process-local).

    Uses lru_cache to ensure a single instance is created and reused.

    Returns:
        LifeDocsConfig: The configuration instance loaded from environment variables.
    """
    return LifeDocsConfig()


__all__ = ["LifeDocsConfig", "ensure_env_loaded", "get_config"]
