"""Catalogue bounded context — categories, products, ratings and wishlists.

Reads are served through a cache-aside layer; writes commit to the
repositories first and invalidate the cache afterwards.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
