"""Operator-facing configuration.

Values come from environment variables and are validated once. The loaded
``Settings`` is a process-wide resource: ``get_settings()`` builds it on first
use and ``reset_settings()`` drops it so tests can change the environment.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

_ENV_KEYS = {
    "cache_adapter": "CACHE_ADAPTER",
    "redis_url": "REDIS_URL",
    "catalog_cache_ttl": "CATALOG_CACHE_TTL",
    "wishlist_max_items": "WISHLIST_MAX_ITEMS",
    "order_number_prefix": "ORDER_NUMBER_PREFIX",
    "order_number_width": "ORDER_NUMBER_WIDTH",
    "sequence_adapter": "SEQUENCE_ADAPTER",
    "sequence_database_uri": "SEQUENCE_DATABASE_URI",
    "sequence_max_attempts": "SEQUENCE_MAX_ATTEMPTS",
    "sequence_base_delay": "SEQUENCE_BASE_DELAY",
}


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Cache store
    cache_adapter: str = Field("memory", pattern=r"^(memory|redis)$")
    redis_url: str = "redis://localhost:6379/0"
    catalog_cache_ttl: int = Field(3600, gt=0)

    # Wishlists
    wishlist_max_items: int = Field(25, gt=0)

    # Order numbering
    order_number_prefix: str = Field("TC", min_length=1, max_length=10)
    order_number_width: int = Field(4, ge=1, le=12)
    sequence_adapter: str = Field("memory", pattern=r"^(memory|sqlalchemy)$")
    sequence_database_uri: str = "sqlite:///order_sequences.db"
    sequence_max_attempts: int = Field(5, ge=1)
    sequence_base_delay: float = Field(0.01, ge=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables, ignoring unset keys."""
        environ = os.environ if environ is None else environ
        values = {field: environ[key] for field, key in _ENV_KEYS.items() if environ.get(key)}
        return cls(**values)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Settings) -> None:
    """Override the active settings (useful for tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    global _settings
    _settings = None
