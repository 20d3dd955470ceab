"""Order placement — command and handler.

The order number is issued before the aggregate is built. If the sequence
store fails, the command fails and nothing is persisted; a counter consumed
by a request that later fails stays consumed.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.sequence import get_sequence_generator

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    grand_total = Float(required=True)
    currency = String(max_length=3, default="USD")
    date_key = String(max_length=6)  # Optional: defaults to today (UTC)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order_number = get_sequence_generator().next_order_number(command.date_key or None)

        order = Order.place(
            order_number=str(order_number),
            customer_id=command.customer_id,
            grand_total=command.grand_total,
            currency=command.currency or "USD",
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=str(order_number),
            customer_id=str(command.customer_id),
        )
        return str(order.id)
