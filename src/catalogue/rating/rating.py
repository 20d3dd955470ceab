"""ProductRating aggregate — one customer's score for a product from one order."""

from datetime import datetime

from protean.fields import DateTime, Identifier, Integer

from catalogue.domain import catalogue


@catalogue.aggregate
class ProductRating:
    product_id: Identifier(required=True)
    customer_id: Identifier(required=True)
    order_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def submit(cls, product_id, customer_id, order_id, rating):
        from catalogue.rating.events import ProductRated

        now = datetime.now()
        product_rating = cls(
            product_id=product_id,
            customer_id=customer_id,
            order_id=order_id,
            rating=rating,
            created_at=now,
            updated_at=now,
        )
        product_rating.raise_(
            ProductRated(
                rating_id=product_rating.id,
                product_id=product_id,
                customer_id=customer_id,
                rating=rating,
                previous_rating=None,
            )
        )
        return product_rating

    def revise(self, rating):
        from catalogue.rating.events import ProductRated

        previous_rating = self.rating
        self.rating = rating
        self.updated_at = datetime.now()

        self.raise_(
            ProductRated(
                rating_id=self.id,
                product_id=self.product_id,
                customer_id=self.customer_id,
                rating=rating,
                previous_rating=previous_rating,
            )
        )
