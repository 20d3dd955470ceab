"""Rating submission — command and handler.

A customer has at most one rating per product per order; resubmitting
revises it in place.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.rating.rating import ProductRating


@catalogue.command(part_of="ProductRating")
class SubmitRating:
    product_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    order_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)


@catalogue.command_handler(part_of=ProductRating)
class SubmitRatingHandler:
    @handle(SubmitRating)
    def submit_rating(self, command):
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(ProductRating)
        existing = repo._dao.query.filter(
            product_id=command.product_id,
            customer_id=command.customer_id,
            order_id=command.order_id,
        ).all().items

        if existing:
            product_rating = existing[0]
            product_rating.revise(command.rating)
        else:
            product_rating = ProductRating.submit(
                product_id=command.product_id,
                customer_id=command.customer_id,
                order_id=command.order_id,
                rating=command.rating,
            )

        repo.add(product_rating)
        return str(product_rating.id)
