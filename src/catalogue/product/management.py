"""Product management — commands and handlers."""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from shared.exceptions import Conflict


@catalogue.command(part_of="Product")
class CreateProduct:
    title: String(required=True, max_length=255)
    slug: String(required=True, max_length=200)
    description: Text()
    price: Float(required=True, min_value=0.0)
    compare_at_price: Float(min_value=0.0)
    category_id: Identifier()


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    title: String(max_length=255)
    slug: String(max_length=200)
    description: Text()
    price: Float(min_value=0.0)
    category_id: Identifier()


@catalogue.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


def _ensure_slug_available(slug, product_id=None):
    taken = current_domain.repository_for(Product)._dao.query.filter(slug=slug).all().items
    if any(str(product.id) != str(product_id) for product in taken):
        raise Conflict({"slug": [f"Product slug '{slug}' is already in use"]})


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _ensure_slug_available(command.slug)

        product = Product.create(
            title=command.title,
            slug=command.slug,
            price=command.price,
            description=command.description,
            category_id=command.category_id,
            compare_at_price=command.compare_at_price,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.slug and command.slug != product.slug:
            _ensure_slug_available(command.slug, product_id=product.id)

        product.update_details(
            title=command.title,
            slug=command.slug,
            description=command.description,
            price=command.price,
            category_id=command.category_id,
        )
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
