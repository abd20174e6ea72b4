"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A buyer placed an order; stock for each line was decremented in the same unit of work."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    item_count: Integer(required=True)
    items_price: Float(required=True)
    total_price: Float(required=True)
    payment_method: String(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusUpdated:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    tracking_number: String()


@storefront.event(part_of="Order")
class OrderPaid:
    __version__ = 1

    order_id: Identifier(required=True)
    total_price: Float(required=True)
    paid_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id: Identifier(required=True)
    delivered_at: DateTime(required=True)
