"""Guest-to-account wishlist reconciliation at login or signup.

``merge`` is safe to run more than once. After a successful run the guest
entry is gone, so a second run recomputes the account's own list unchanged.
If a run dies after persisting but before the guest entry is deleted, the
retry recomputes the same union.
"""

import structlog
from protean.utils.globals import current_domain

from catalogue.wishlist.cache import WishlistCache
from catalogue.wishlist.item import WishlistItem
from catalogue.wishlist.owner import Owner

logger = structlog.get_logger(__name__)


class ReconciliationService:
    def __init__(self, wishlists: WishlistCache | None = None):
        self.wishlists = wishlists or WishlistCache()

    def merge(self, guest_session_id: str, user_id: str) -> list[str]:
        """Fold the guest's wishlist into the account's; returns the merged ids.

        The account's items come first. Nothing is dropped: a union larger
        than the wishlist cap is kept whole, and later adds are rejected
        until the owner removes items.
        """
        guest = Owner.guest(guest_session_id)
        user = Owner.user(user_id)

        guest_items = self.wishlists.list(guest)
        user_items = self.wishlists.list(user)

        merged = list(dict.fromkeys([*user_items, *guest_items]))
        if len(merged) > self.wishlists.max_items:
            logger.warning(
                "Merged wishlist is over the item cap",
                user_id=user_id,
                count=len(merged),
                max_items=self.wishlists.max_items,
            )

        repo = current_domain.repository_for(WishlistItem)
        persisted = set(repo.product_ids_for(user_id))
        for product_id in merged:
            if product_id not in persisted:
                repo.add_member(user_id, product_id)

        self.wishlists.replace(user, merged)
        self.wishlists.clear(guest)

        logger.info(
            "Merged guest wishlist into account",
            guest_session_id=guest_session_id,
            user_id=user_id,
            guest_count=len(guest_items),
            user_count=len(user_items),
            merged_count=len(merged),
        )
        return merged
