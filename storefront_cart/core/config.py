"""Environment-driven configuration objects for the cart."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .constants import (
    CART_STORAGE_KEY,
    CART_TTL_SECONDS,
    CATALOG_TIMEOUT_SECONDS,
    DEFAULT_CATALOG_API_URL,
)
from .exceptions import ConfigurationException
from .i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationException(f"{name} must be a number, got {raw!r}") from exc


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationException(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class CatalogConfig:
    base_url: str
    timeout: float


@dataclass(slots=True)
class StorageConfig:
    redis_url: str | None
    key: str
    ttl_seconds: int


@dataclass(slots=True)
class Settings:
    catalog: CatalogConfig
    storage: StorageConfig
    language: str
    log_level: str

    @property
    def redis_url(self) -> str | None:
        """Shortcut for storage.redis_url."""
        return self.storage.redis_url


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    base_url = os.getenv("CATALOG_API_URL", DEFAULT_CATALOG_API_URL).rstrip("/")
    if not base_url:
        raise ConfigurationException("CATALOG_API_URL must not be empty")

    timeout = _read_float("CATALOG_TIMEOUT_SECONDS", CATALOG_TIMEOUT_SECONDS)
    if timeout <= 0:
        raise ConfigurationException("CATALOG_TIMEOUT_SECONDS must be positive")

    ttl_seconds = _read_int("CART_TTL_SECONDS", CART_TTL_SECONDS)
    if ttl_seconds < 0:
        raise ConfigurationException("CART_TTL_SECONDS must not be negative")

    language = os.getenv("CART_LANGUAGE", DEFAULT_LANGUAGE).strip().lower()
    if language not in SUPPORTED_LANGUAGES:
        raise ConfigurationException(
            f"CART_LANGUAGE must be one of {', '.join(SUPPORTED_LANGUAGES)}, got {language!r}"
        )

    return Settings(
        catalog=CatalogConfig(base_url=base_url, timeout=timeout),
        storage=StorageConfig(
            redis_url=os.getenv("REDIS_URL") or None,
            key=os.getenv("CART_STORAGE_KEY") or CART_STORAGE_KEY,
            ttl_seconds=ttl_seconds,
        ),
        language=language,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
