"""Wishlist cache — owner-scoped membership over the shared cache store.

Guest wishlists live only in the cache: a miss means an empty list. Account
wishlists are cache-aside over the WishlistItem table: a miss loads the table
and fills the cache without expiry, since membership only changes through
explicit writes, which update the cache and then the table. A write the
cache refuses drops the entry instead, so the next read reloads the table.
"""

from __future__ import annotations

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from catalogue.wishlist.item import WishlistItem
from catalogue.wishlist.owner import Owner
from shared.cache import CachePort, get_cache
from shared.exceptions import Conflict, NotFound
from shared.settings import get_settings

logger = structlog.get_logger(__name__)


class WishlistCache:
    def __init__(self, cache: CachePort | None = None, max_items: int | None = None):
        self.cache = cache or get_cache()
        self.max_items = max_items if max_items is not None else get_settings().wishlist_max_items

    def _repository(self):
        return current_domain.repository_for(WishlistItem)

    def _cached(self, owner: Owner) -> list[str] | None:
        payload = self.cache.get_json(owner.cache_key)
        if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
            return None
        return list(dict.fromkeys(payload))

    def _store(self, owner: Owner, product_ids: list[str]) -> None:
        # Entries never expire, so a refused write must not leave the old list behind.
        if not self.cache.set_json(owner.cache_key, product_ids):
            self.cache.delete(owner.cache_key)

    def list(self, owner: Owner) -> list[str]:
        """Product ids in the owner's wishlist, in the order they were added."""
        cached = self._cached(owner)
        if cached is not None:
            return cached
        if owner.is_guest:
            return []

        product_ids = self._repository().product_ids_for(owner.id)
        self._store(owner, product_ids)
        logger.debug("Wishlist loaded from table", user_id=owner.id, count=len(product_ids))
        return product_ids

    def count(self, owner: Owner) -> int:
        return len(self.list(owner))

    def _check_product(self, product_id: str) -> None:
        try:
            product = current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError as exc:
            raise NotFound({"product_id": [f"Product '{product_id}' not found"]}) from exc
        if not product.is_active:
            raise Conflict({"product_id": ["Cannot add inactive product to wishlist"]})

    def add(self, owner: Owner, product_id: str) -> list[str]:
        """Add a product; returns the updated membership.

        Raises:
            NotFound: the product does not exist.
            Conflict: inactive product, already a member, or the list is full.
        """
        product_id = str(product_id)
        self._check_product(product_id)

        members = self.list(owner)
        if product_id in members:
            raise Conflict({"product_id": ["Product is already in your wishlist"]})
        if len(members) >= self.max_items:
            raise Conflict({"wishlist": [f"Wishlist is full. Maximum {self.max_items} items allowed."]})

        updated = [*members, product_id]
        self._store(owner, updated)

        if not owner.is_guest:
            try:
                self._repository().add_member(owner.id, product_id)
            except Exception:
                self.cache.delete(owner.cache_key)
                raise

        logger.info("Added product to wishlist", owner=owner.cache_key, product_id=product_id, count=len(updated))
        return updated

    def remove(self, owner: Owner, product_id: str) -> list[str]:
        """Remove a product; removing a non-member changes nothing."""
        product_id = str(product_id)
        members = self.list(owner)
        updated = [member for member in members if member != product_id]
        if updated != members:
            self._store(owner, updated)

        if not owner.is_guest:
            try:
                self._repository().remove_member(owner.id, product_id)
            except Exception:
                self.cache.delete(owner.cache_key)
                raise

        return updated

    def replace(self, owner: Owner, product_ids: list[str]) -> None:
        """Overwrite the cached membership; the table is not touched."""
        self._store(owner, list(dict.fromkeys(str(product_id) for product_id in product_ids)))

    def clear(self, owner: Owner) -> None:
        self.cache.delete(owner.cache_key)
