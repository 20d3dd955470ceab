"""Ordering bounded context — order placement and order numbering.

Owns the per-day order sequence used to mint human-readable order numbers
and the minimal Order aggregate that records them.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
ordering = Domain(name="ordering")
