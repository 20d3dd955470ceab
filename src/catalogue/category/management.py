"""Category management — commands and handlers."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from shared.exceptions import Conflict


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    image_url: String(max_length=500)
    display_order: Integer(default=0)


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    slug: String(max_length=120)
    image_url: String(max_length=500)


@catalogue.command(part_of="Category")
class DeactivateCategory:
    category_id: Identifier(required=True)


def _ensure_slug_available(slug, category_id=None):
    taken = current_domain.repository_for(Category)._dao.query.filter(slug=slug).all().items
    if any(str(category.id) != str(category_id) for category in taken):
        raise Conflict({"slug": [f"Category slug '{slug}' is already in use"]})


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _ensure_slug_available(command.slug)

        category = Category.create(
            name=command.name,
            slug=command.slug,
            image_url=command.image_url,
            display_order=command.display_order or 0,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.slug and command.slug != category.slug:
            _ensure_slug_available(command.slug, category_id=category.id)

        category.update_details(
            name=command.name,
            slug=command.slug,
            image_url=command.image_url,
        )
        repo.add(category)

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.deactivate()
        repo.add(category)
