"""Catalogue and wishlist flows over the Redis adapter.

The redis-py client is replaced with an in-test double that keeps values and
expiries in dictionaries, so the adapter's calls are exercised end to end.
"""

import pytest
from catalogue import queries, services
from catalogue.cache import CatalogKeys
from catalogue.wishlist.cache import WishlistCache
from catalogue.wishlist.owner import Owner
from catalogue.wishlist.reconciliation import ReconciliationService
from shared.cache import set_cache
from shared.cache.redis_adapter import RedisCache


class RecordingRedisClient:
    def __init__(self):
        self.values = {}
        self.expiries = {}

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value, ex=None):
        self.values[key] = value
        if ex is None:
            self.expiries.pop(key, None)
        else:
            self.expiries[key] = ex
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            removed += self.values.pop(key, None) is not None
            self.expiries.pop(key, None)
        return removed

    def exists(self, key):
        return int(key in self.values)

    def ping(self):
        return True

    def close(self):
        pass


@pytest.fixture
def client():
    client = RecordingRedisClient()
    set_cache(RedisCache(client))
    return client


class TestCatalogueOnRedis:
    def test_category_ttl_passed_to_redis(self, client):
        services.create_category(name="Shoes", slug="shoes")

        queries.list_categories()

        assert client.expiries[CatalogKeys.CATEGORIES] == 3600
        assert client.expiries[CatalogKeys.category("shoes")] == 3600

    def test_rating_summary_has_no_expiry(self, client):
        product = services.create_product(title="Hiker", slug="hiker", price=150.0)

        queries.get_rating_summary(product.id)

        assert CatalogKeys.ratings(product.id) in client.values
        assert CatalogKeys.ratings(product.id) not in client.expiries

    def test_slug_rename(self, client):
        category = services.create_category(name="Shoes", slug="shoes")
        queries.get_category_by_slug("shoes")

        services.update_category(category.id, slug="footwear")

        assert CatalogKeys.category("shoes") not in client.values
        assert queries.get_category_by_slug("footwear").id == category.id


class TestWishlistOnRedis:
    def test_merge(self, client):
        p1, p2, p3 = (
            services.create_product(title=f"Product {n}", slug=f"product-{n}", price=10.0).id for n in (1, 2, 3)
        )
        wishlists = WishlistCache()
        wishlists.add(Owner.guest("sess-1"), p1)
        wishlists.add(Owner.guest("sess-1"), p2)
        wishlists.add(Owner.user("user-1"), p2)
        wishlists.add(Owner.user("user-1"), p3)

        ReconciliationService(wishlists).merge("sess-1", "user-1")

        assert "wishlist:guest:sess-1" not in client.values
        assert set(wishlists.list(Owner.user("user-1"))) == {p1, p2, p3}
        assert "wishlist:user:user-1" not in client.expiries
