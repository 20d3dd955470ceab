"""Typed errors surfaced to callers of the storefront core.

They extend Protean's exceptions so handlers and callers treat them the same
way as any other domain error: a dict of messages keyed by field.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class NotFound(ObjectNotFoundError):
    """A referenced product, category or rating summary does not exist."""


class Conflict(ValidationError):
    """The request contradicts current state (duplicate, cap reached, inactive)."""


class InvalidOwner(ValidationError):
    """Neither an account nor a guest session could be resolved for a wishlist."""
