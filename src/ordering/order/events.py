"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """An order was persisted under a freshly issued order number."""

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    grand_total = Float(required=True)
    currency = String(default="USD")
    placed_at = DateTime(required=True)
