"""Category aggregate root for product categorization."""

import re
from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String

from catalogue.domain import catalogue

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def validate_slug(slug):
    if not slug or not SLUG_PATTERN.match(slug):
        raise ValidationError({"slug": [f"Invalid slug: {slug!r}"]})
    return slug


@catalogue.aggregate
class Category:
    """A storefront grouping of products, addressed publicly by its slug."""

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    image_url: String(max_length=500)
    is_active: Boolean(default=True)
    display_order: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, slug, image_url=None, display_order=0):
        from catalogue.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            slug=validate_slug(slug),
            image_url=image_url,
            display_order=display_order,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=slug,
            )
        )
        return category

    def update_details(self, name=None, slug=None, image_url=None):
        from catalogue.category.events import CategoryDetailsUpdated

        previous_slug = self.slug

        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = validate_slug(slug)
        if image_url is not None:
            self.image_url = image_url

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
                previous_slug=previous_slug,
                image_url=self.image_url,
            )
        )

    def deactivate(self):
        from catalogue.category.events import CategoryDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Category is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            CategoryDeactivated(
                category_id=self.id,
                slug=self.slug,
                deactivated_at=now,
            )
        )
