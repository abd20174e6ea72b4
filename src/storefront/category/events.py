"""Domain events for the Category aggregate."""

from protean.fields import Boolean, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    is_active: Boolean(default=True)


@storefront.event(part_of="Category")
class CategoryUpdated:
    """A category's name, description, image or visibility changed."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    is_active: Boolean(default=True)
