"""Product creation: command and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.product.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    """`images` is a JSON list of URLs, `specifications` a JSON object."""

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    discount_percentage: Float(default=0.0, min_value=0.0, max_value=100.0)
    images: Text()
    category_id: Identifier(required=True)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    specifications: Text()


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        # Raises ObjectNotFoundError for an unknown category
        current_domain.repository_for(Category).get(command.category_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            discount_percentage=command.discount_percentage,
            images=command.images,
            category_id=command.category_id,
            stock=command.stock,
            is_active=command.is_active,
            specifications=command.specifications,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_created", product_id=str(product.id), category_id=str(command.category_id))
        return str(product.id)
