"""Wishlist owners — a guest session or an authenticated account."""

from dataclasses import dataclass
from enum import Enum

from shared.exceptions import InvalidOwner

WISHLIST_KEY_PREFIX = "wishlist"


class OwnerKind(Enum):
    GUEST = "guest"
    USER = "user"


@dataclass(frozen=True)
class Owner:
    kind: OwnerKind
    id: str

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise InvalidOwner({"owner": [f"A {self.kind.value} wishlist owner needs an identifier"]})

    @classmethod
    def guest(cls, session_id: str) -> "Owner":
        return cls(OwnerKind.GUEST, session_id)

    @classmethod
    def user(cls, user_id: str) -> "Owner":
        return cls(OwnerKind.USER, user_id)

    @property
    def is_guest(self) -> bool:
        return self.kind is OwnerKind.GUEST

    @property
    def cache_key(self) -> str:
        return f"{WISHLIST_KEY_PREFIX}:{self.kind.value}:{self.id}"


def resolve_owner(user_id: str | None = None, guest_session_id: str | None = None) -> Owner:
    """Pick the wishlist owner for a request; an account wins over a session."""
    if user_id:
        return Owner.user(user_id)
    if guest_session_id:
        return Owner.guest(guest_session_id)
    raise InvalidOwner({"owner": ["Request has neither an authenticated user nor a guest session"]})
