"""WishlistItem aggregate — durable wishlist membership for accounts.

Guest wishlists have no durable counterpart. The identity of an item is the
(user, product) pair itself, so the table cannot hold a duplicate membership.
"""

from datetime import datetime

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier, String

from catalogue.domain import catalogue

logger = structlog.get_logger(__name__)


def membership_id(user_id, product_id) -> str:
    return f"{user_id}:{product_id}"


@catalogue.aggregate
class WishlistItem:
    item_id: String(identifier=True, required=True, max_length=255)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def for_member(cls, user_id, product_id):
        return cls(
            item_id=membership_id(user_id, product_id),
            user_id=user_id,
            product_id=product_id,
            created_at=datetime.now(),
        )


@catalogue.repository(part_of=WishlistItem)
class WishlistItemRepository:
    def product_ids_for(self, user_id) -> list[str]:
        """Product ids wishlisted by ``user_id``, oldest first."""
        items = self._dao.query.filter(user_id=user_id).all().items
        return [str(item.product_id) for item in sorted(items, key=lambda item: item.created_at)]

    def add_member(self, user_id, product_id) -> bool:
        """Persist a membership; an existing one is left untouched."""
        try:
            self.get(membership_id(user_id, product_id))
            return False
        except ObjectNotFoundError:
            pass

        try:
            self.add(WishlistItem.for_member(user_id, product_id))
        except ValidationError as exc:
            # A concurrent writer inserted the same pair first.
            logger.info(
                "Wishlist item already persisted",
                user_id=str(user_id),
                product_id=str(product_id),
                error=str(exc),
            )
            return False
        return True

    def remove_member(self, user_id, product_id) -> bool:
        try:
            item = self.get(membership_id(user_id, product_id))
        except ObjectNotFoundError:
            return False
        self._dao.delete(item)
        return True
