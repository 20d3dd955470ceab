"""Catalogue read path.

Each query resolves its canonical cache key, returns the cached view on a
hit, and on a miss loads from the repository, converts to the view shape and
fills the cache. Public reads only ever return active entities; anything
absent or inactive raises ``NotFound`` and is never cached.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.cache import CatalogKeys, get_catalog_cache
from catalogue.category.category import Category
from catalogue.product.product import Product
from catalogue.rating.rating import ProductRating
from catalogue.views import CategoryView, ProductView, RatingSummary
from shared.exceptions import NotFound


def _active_product(product_id):
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None
    return product if product.is_active else None


def list_categories() -> list[CategoryView]:
    def load():
        categories = current_domain.repository_for(Category)._dao.query.filter(is_active=True).all().items
        ordered = sorted(categories, key=lambda category: (category.display_order or 0, category.name))
        return [CategoryView.from_aggregate(category) for category in ordered]

    return get_catalog_cache().fetch_many(CatalogKeys.CATEGORIES, CategoryView, load)


def get_category_by_slug(slug: str) -> CategoryView:
    def load():
        matches = current_domain.repository_for(Category)._dao.query.filter(slug=slug, is_active=True).all().items
        return CategoryView.from_aggregate(matches[0]) if matches else None

    view = get_catalog_cache().fetch(CatalogKeys.category(slug), CategoryView, load)
    if view is None:
        raise NotFound({"slug": [f"Category '{slug}' not found"]})
    return view


def list_products(category_id: str | None = None) -> list[ProductView]:
    def load():
        query = current_domain.repository_for(Product)._dao.query.filter(is_active=True)
        if category_id:
            query = query.filter(category_id=category_id)
        products = sorted(query.all().items, key=lambda product: product.created_at, reverse=True)
        return [ProductView.from_aggregate(product) for product in products]

    key = CatalogKeys.products_in_category(category_id) if category_id else CatalogKeys.PRODUCTS
    return get_catalog_cache().fetch_many(key, ProductView, load)


def get_product(product_id: str) -> ProductView:
    def load():
        product = _active_product(product_id)
        return ProductView.from_aggregate(product) if product else None

    view = get_catalog_cache().fetch(CatalogKeys.product(product_id), ProductView, load)
    if view is None:
        raise NotFound({"product_id": [f"Product '{product_id}' not found"]})
    return view


def get_product_by_slug(slug: str) -> ProductView:
    def load():
        matches = current_domain.repository_for(Product)._dao.query.filter(slug=slug, is_active=True).all().items
        return ProductView.from_aggregate(matches[0]) if matches else None

    view = get_catalog_cache().fetch(CatalogKeys.product_by_slug(slug), ProductView, load)
    if view is None:
        raise NotFound({"slug": [f"Product '{slug}' not found"]})
    return view


def get_rating_summary(product_id: str) -> RatingSummary:
    """Average, count and 1-5 breakdown; cached until the next rating lands."""

    def load():
        try:
            current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            return None
        ratings = current_domain.repository_for(ProductRating)._dao.query.filter(product_id=product_id).all().items
        return RatingSummary.from_scores(product_id, [rating.rating for rating in ratings])

    summary = get_catalog_cache().fetch(CatalogKeys.ratings(product_id), RatingSummary, load, ttl=None)
    if summary is None:
        raise NotFound({"product_id": [f"Product '{product_id}' not found"]})
    return summary
