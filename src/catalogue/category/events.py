"""Domain events for the Category aggregate."""

from protean.fields import DateTime, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Category")
class CategoryCreated:
    """A new category was added to the storefront."""

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@catalogue.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category's name, slug or image changed."""

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    previous_slug: String(required=True)
    image_url: String()


@catalogue.event(part_of="Category")
class CategoryDeactivated:
    """A category was hidden from the storefront."""

    category_id: Identifier(required=True)
    slug: String(required=True)
    deactivated_at: DateTime(required=True)
