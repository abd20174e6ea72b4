"""Category management: commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean(default=True)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(
            name=command.name,
            description=command.description,
            image=command.image,
            is_active=command.is_active,
        )
        current_domain.repository_for(Category).add(category)

        logger.info("category_created", category_id=str(category.id), name=category.name)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        category.update_details(
            name=command.name,
            description=command.description,
            image=command.image,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from storefront.product.product import Product

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        referencing = current_domain.repository_for(Product).count_in_category(category.id)
        if referencing:
            raise ValidationError(
                {"category_id": [f"Category is still used by {referencing} product(s)"]}
            )

        repo.remove(category)
        logger.info("category_deleted", category_id=str(category.id), name=category.name)
