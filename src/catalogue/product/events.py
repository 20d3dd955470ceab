"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    product_id: Identifier(required=True)
    title: String(required=True)
    slug: String(required=True)
    category_id: Identifier()
    price: Float(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """A product's descriptive fields, price or category changed."""

    product_id: Identifier(required=True)
    title: String(required=True)
    slug: String(required=True)
    previous_slug: String(required=True)
    category_id: Identifier()
    previous_category_id: Identifier()
    price: Float(required=True)


@catalogue.event(part_of="Product")
class ProductDeactivated:
    """A product was withdrawn from sale."""

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
