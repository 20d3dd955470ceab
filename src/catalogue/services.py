"""Catalogue write path.

Every write commits through its command handler (or the repository) first
and only then tells the catalogue cache, which invalidates list keys before
the per-entity keys addressed by old and new attribute values.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalogue.cache import get_catalog_cache
from catalogue.category.category import Category
from catalogue.category.management import CreateCategory, DeactivateCategory, UpdateCategory
from catalogue.product.management import CreateProduct, DeactivateProduct, UpdateProduct
from catalogue.product.product import Product
from catalogue.rating.submission import SubmitRating
from catalogue.views import CategoryView, ProductView
from shared.exceptions import NotFound

logger = structlog.get_logger(__name__)


def _load(aggregate_cls, identifier):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError as exc:
        raise NotFound({"_entity": [f"{aggregate_cls.__name__} '{identifier}' not found"]}) from exc


# --- Categories ---


def create_category(name, slug, image_url=None, display_order=0) -> CategoryView:
    category_id = current_domain.process(
        CreateCategory(name=name, slug=slug, image_url=image_url, display_order=display_order),
        asynchronous=False,
    )
    after = CategoryView.from_aggregate(_load(Category, category_id))
    get_catalog_cache().category_written(None, after)
    return after


def update_category(category_id, name=None, slug=None, image_url=None) -> CategoryView:
    before = CategoryView.from_aggregate(_load(Category, category_id))
    current_domain.process(
        UpdateCategory(category_id=category_id, name=name, slug=slug, image_url=image_url),
        asynchronous=False,
    )
    after = CategoryView.from_aggregate(_load(Category, category_id))
    get_catalog_cache().category_written(before, after)
    return after


def deactivate_category(category_id) -> CategoryView:
    before = CategoryView.from_aggregate(_load(Category, category_id))
    current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)
    after = CategoryView.from_aggregate(_load(Category, category_id))
    get_catalog_cache().category_written(before, after)
    return after


def delete_category(category_id) -> None:
    category = _load(Category, category_id)
    before = CategoryView.from_aggregate(category)
    current_domain.repository_for(Category)._dao.delete(category)
    get_catalog_cache().category_written(before, None)
    logger.info("Category deleted", category_id=str(category_id), slug=before.slug)


# --- Products ---


def create_product(title, slug, price, description=None, category_id=None, compare_at_price=None) -> ProductView:
    product_id = current_domain.process(
        CreateProduct(
            title=title,
            slug=slug,
            price=price,
            description=description,
            category_id=category_id,
            compare_at_price=compare_at_price,
        ),
        asynchronous=False,
    )
    after = ProductView.from_aggregate(_load(Product, product_id))
    get_catalog_cache().product_written(None, after)
    return after


def update_product(product_id, title=None, slug=None, description=None, price=None, category_id=None) -> ProductView:
    before = ProductView.from_aggregate(_load(Product, product_id))
    current_domain.process(
        UpdateProduct(
            product_id=product_id,
            title=title,
            slug=slug,
            description=description,
            price=price,
            category_id=category_id,
        ),
        asynchronous=False,
    )
    after = ProductView.from_aggregate(_load(Product, product_id))
    get_catalog_cache().product_written(before, after)
    return after


def deactivate_product(product_id) -> ProductView:
    before = ProductView.from_aggregate(_load(Product, product_id))
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    after = ProductView.from_aggregate(_load(Product, product_id))
    get_catalog_cache().product_written(before, after)
    return after


def delete_product(product_id) -> None:
    product = _load(Product, product_id)
    before = ProductView.from_aggregate(product)
    current_domain.repository_for(Product)._dao.delete(product)

    catalog_cache = get_catalog_cache()
    catalog_cache.product_written(before, None)
    catalog_cache.rating_written(before.id)
    logger.info("Product deleted", product_id=str(product_id), slug=before.slug)


# --- Ratings ---


def submit_rating(product_id, customer_id, order_id, rating) -> str:
    _load(Product, product_id)
    rating_id = current_domain.process(
        SubmitRating(product_id=product_id, customer_id=customer_id, order_id=order_id, rating=rating),
        asynchronous=False,
    )
    get_catalog_cache().rating_written(str(product_id))
    return rating_id
