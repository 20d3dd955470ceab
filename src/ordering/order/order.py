"""Order aggregate — the record an order number is minted for.

Pricing, items and fulfilment are handled outside this core; the aggregate
keeps only what identifies the order to the customer.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.aggregate
class Order:
    order_number: String(required=True, max_length=50, unique=True)
    customer_id: Identifier(required=True)
    grand_total: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default="USD")
    placed_at: DateTime()

    @classmethod
    def place(cls, order_number, customer_id, grand_total, currency="USD"):
        from ordering.order.events import OrderPlaced

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            customer_id=customer_id,
            grand_total=grand_total,
            currency=currency,
            placed_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order_number,
                customer_id=customer_id,
                grand_total=grand_total,
                currency=currency,
                placed_at=now,
            )
        )
        return order
