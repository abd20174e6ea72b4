"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category_id: Identifier(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """An admin changed one or more product fields."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    discount_percentage: Float()
    stock: Integer(required=True)
    is_active: Boolean()


@storefront.event(part_of="Product")
class StockDecremented:
    """Units were taken out of stock by an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
