"""BDD tests for wishlists and guest-to-account reconciliation."""

from catalogue import services
from catalogue.wishlist.cache import WishlistCache
from catalogue.wishlist.owner import Owner
from catalogue.wishlist.reconciliation import ReconciliationService
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/wishlist.feature")


def _names(text):
    return [name.strip().strip('"') for name in text.replace(" and ", ", ").split(",")]


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("the products {names} are in the catalogue"), target_fixture="wishlists")
def products_in_catalogue(cache, catalogue_ids, names):
    for name in _names(names):
        catalogue_ids[name] = services.create_product(title=name, slug=name.lower(), price=10.0).id
    return WishlistCache(cache=cache)


@given(parsers.cfparse('the guest session "{session_id}" has wishlisted "{first}" and "{second}"'))
def guest_has_wishlisted(wishlists, catalogue_ids, session_id, first, second):
    for name in (first, second):
        wishlists.add(Owner.guest(session_id), catalogue_ids[name])


@given(parsers.cfparse('the user "{user_id}" has wishlisted {count:d} products'))
def user_has_wishlisted_many(wishlists, user_id, count):
    for n in range(count):
        product_id = services.create_product(title=f"Filler {n}", slug=f"filler-{n}", price=1.0).id
        wishlists.add(Owner.user(user_id), product_id)


@given(parsers.cfparse('the user "{user_id}" has wishlisted "{first}" and "{second}"'))
def user_has_wishlisted(wishlists, catalogue_ids, user_id, first, second):
    for name in (first, second):
        wishlists.add(Owner.user(user_id), catalogue_ids[name])


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the guest session "{session_id}" logs in as "{user_id}"'))
def guest_logs_in(wishlists, session_id, user_id):
    ReconciliationService(wishlists).merge(session_id, user_id)


@when(parsers.cfparse('the user "{user_id}" wishlists "{name}"'))
def user_wishlists(wishlists, catalogue_ids, error, user_id, name):
    try:
        wishlists.add(Owner.user(user_id), catalogue_ids[name])
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the wishlist of "{user_id}" holds {names}'))
def wishlist_holds(wishlists, catalogue_ids, user_id, names):
    expected = {catalogue_ids[name] for name in _names(names)}
    members = wishlists.list(Owner.user(user_id))
    assert set(members) == expected
    assert len(members) == len(expected)


@then(parsers.cfparse('the guest session "{session_id}" has an empty wishlist'))
def guest_wishlist_empty(wishlists, session_id):
    assert wishlists.list(Owner.guest(session_id)) == []


@then(parsers.cfparse('the request is rejected with "{message}"'))
def request_rejected(error, message):
    assert error["exc"] is not None
    assert message in str(error["exc"])
