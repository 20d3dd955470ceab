"""Product aggregate root."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from catalogue.category.category import validate_slug
from catalogue.domain import catalogue


@catalogue.aggregate
class Product:
    """A sellable item. Only active products are listed or wishlisted."""

    title: String(required=True, max_length=255)
    slug: String(required=True, max_length=200)
    description: Text()
    price: Float(required=True, min_value=0.0)
    compare_at_price: Float(min_value=0.0)
    category_id: Identifier()
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, title, slug, price, description=None, category_id=None, compare_at_price=None):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            title=title,
            slug=validate_slug(slug),
            description=description,
            price=price,
            compare_at_price=compare_at_price,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                title=title,
                slug=slug,
                category_id=category_id,
                price=price,
            )
        )
        return product

    def update_details(self, title=None, slug=None, description=None, price=None, category_id=None):
        from catalogue.product.events import ProductDetailsUpdated

        previous_slug = self.slug
        previous_category_id = self.category_id

        if title is not None:
            self.title = title
        if slug is not None:
            self.slug = validate_slug(slug)
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category_id is not None:
            self.category_id = category_id

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                title=self.title,
                slug=self.slug,
                previous_slug=previous_slug,
                category_id=self.category_id,
                previous_category_id=previous_category_id,
                price=self.price,
            )
        )

    def deactivate(self):
        from catalogue.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Product is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            ProductDeactivated(
                product_id=self.id,
                deactivated_at=now,
            )
        )
