"""Product updates: command and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class UpdateProduct:
    """Partial update; fields left empty keep their current value."""

    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    discount_percentage: Float(min_value=0.0, max_value=100.0)
    images: Text()
    category_id: Identifier()
    stock: Integer(min_value=0)
    rating: Float(min_value=0.0, max_value=5.0)
    num_reviews: Integer(min_value=0)
    is_active: Boolean()
    specifications: Text()


@storefront.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id:
            current_domain.repository_for(Category).get(command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            discount_percentage=command.discount_percentage,
            images=command.images,
            category_id=command.category_id,
            stock=command.stock,
            rating=command.rating,
            num_reviews=command.num_reviews,
            is_active=command.is_active,
            specifications=command.specifications,
        )
        repo.add(product)
