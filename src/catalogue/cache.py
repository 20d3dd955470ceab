"""Catalogue cache — read-through on miss, invalidate after write.

Writers must commit to the repository before calling the ``*_written``
hooks. The hooks delete list keys first, then every per-entity key the old or
new attribute values address, and only then (optionally) prime the fresh
entity. A reader racing the write can therefore only re-fill a key from the
committed state.
"""

from collections.abc import Callable
from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from catalogue.views import CategoryView, ProductView
from shared.cache import CachePort, get_cache
from shared.settings import get_settings

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

# Sentinel: use the configured catalogue TTL. None means no expiry.
CATALOG_TTL = -1


class CatalogKeys:
    CATEGORIES = "categories:all"
    PRODUCTS = "products:all"

    @staticmethod
    def category(slug: str) -> str:
        return f"category:{slug}"

    @staticmethod
    def product(product_id: str) -> str:
        return f"product:{product_id}"

    @staticmethod
    def product_by_slug(slug: str) -> str:
        return f"product:slug:{slug}"

    @staticmethod
    def products_in_category(category_id: str) -> str:
        return f"products:category:{category_id}"

    @staticmethod
    def ratings(product_id: str) -> str:
        return f"ratings:product:{product_id}"


class CatalogCache:
    def __init__(self, cache: CachePort | None = None, ttl: int | None = None, prime_on_write: bool = True):
        self.cache = cache or get_cache()
        self.ttl = ttl if ttl is not None else get_settings().catalog_cache_ttl
        self.prime_on_write = prime_on_write

    # --- Read path ---

    def _cached(self, key: str, model: type[M]) -> M | None:
        payload = self.cache.get_json(key)
        if payload is None:
            return None
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Cached catalogue entry has unexpected shape, treating as miss", key=key, error=str(exc))
            return None

    def _cached_list(self, key: str, model: type[M]) -> list[M] | None:
        payload = self.cache.get_json(key)
        if not isinstance(payload, list):
            return None
        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as exc:
            logger.warning("Cached catalogue list has unexpected shape, treating as miss", key=key, error=str(exc))
            return None

    def fetch(
        self, key: str, model: type[M], loader: Callable[[], M | None], ttl: int | None = CATALOG_TTL
    ) -> M | None:
        """Return the cached entity, or load it and fill the cache.

        ``loader`` returns None when the entity does not exist; absence is
        never cached. ``ttl=None`` stores without expiry; the default uses
        the catalogue TTL.
        """
        cached = self._cached(key, model)
        if cached is not None:
            logger.debug("Catalogue cache hit", key=key)
            return cached

        logger.debug("Catalogue cache miss", key=key)
        value = loader()
        if value is not None:
            self.cache.set_json(key, value.model_dump(mode="json"), self._ttl(ttl))
        return value

    def fetch_many(
        self, key: str, model: type[M], loader: Callable[[], list[M]], ttl: int | None = CATALOG_TTL
    ) -> list[M]:
        cached = self._cached_list(key, model)
        if cached is not None:
            logger.debug("Catalogue cache hit", key=key)
            return cached

        logger.debug("Catalogue cache miss", key=key)
        values = loader()
        self.cache.set_json(key, [value.model_dump(mode="json") for value in values], self._ttl(ttl))
        return values

    def _ttl(self, ttl: int | None) -> int | None:
        return self.ttl if ttl == CATALOG_TTL else ttl

    # --- Write path ---

    def invalidate(self, *keys: str) -> None:
        for key in dict.fromkeys(keys):
            self.cache.delete(key)

    def prime(self, key: str, value: BaseModel, ttl: int | None = CATALOG_TTL) -> None:
        self.cache.set_json(key, value.model_dump(mode="json"), self._ttl(ttl))

    def category_written(self, before: CategoryView | None, after: CategoryView | None) -> None:
        """Invalidate after a committed category create, update or delete."""
        self.invalidate(CatalogKeys.CATEGORIES)

        slugs = [view.slug for view in (before, after) if view is not None]
        self.invalidate(*(CatalogKeys.category(slug) for slug in slugs))

        if self.prime_on_write and after is not None and after.is_active:
            self.prime(CatalogKeys.category(after.slug), after)

        subject = after or before
        logger.info("Category cache invalidated", category_id=subject.id if subject else None, slugs=slugs)

    def product_written(self, before: ProductView | None, after: ProductView | None) -> None:
        """Invalidate after a committed product create, update or delete."""
        self.invalidate(CatalogKeys.PRODUCTS)

        views = [view for view in (before, after) if view is not None]
        self.invalidate(
            *(CatalogKeys.products_in_category(view.category_id) for view in views if view.category_id),
        )
        self.invalidate(
            *(CatalogKeys.product(view.id) for view in views),
            *(CatalogKeys.product_by_slug(view.slug) for view in views),
        )

        if self.prime_on_write and after is not None and after.is_active:
            self.prime(CatalogKeys.product(after.id), after)
            self.prime(CatalogKeys.product_by_slug(after.slug), after)

        logger.info("Product cache invalidated", product_id=views[0].id if views else None)

    def rating_written(self, product_id: str) -> None:
        self.invalidate(CatalogKeys.ratings(product_id))


_catalog_cache: CatalogCache | None = None


def get_catalog_cache() -> CatalogCache:
    global _catalog_cache
    if _catalog_cache is None:
        _catalog_cache = CatalogCache()
    return _catalog_cache


def reset_catalog_cache() -> None:
    global _catalog_cache
    _catalog_cache = None
