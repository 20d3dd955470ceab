"""Domain events for the ProductRating aggregate."""

from protean.fields import Identifier, Integer

from catalogue.domain import catalogue


@catalogue.event(part_of="ProductRating")
class ProductRated:
    """A customer rated a product, or changed an earlier rating."""

    rating_id: Identifier(required=True)
    product_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    rating: Integer(required=True)
    previous_rating: Integer()
