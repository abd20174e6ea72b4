"""Order aggregate with embedded items, shipping address and pricing.

An order is a snapshot taken at purchase time: item names, prices and images
are copied from the catalogue and the pricing totals are computed once, at
placement, and never recomputed.

Statuses carry no enforced transition graph. Admins may move an order to any
status; only `delivered` and payment have side effects on the order's flags.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from storefront.domain import storefront
from storefront.product.product import MAX_IMAGE_URL_LENGTH


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, captured at checkout."""

    address: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)


@storefront.value_object(part_of="Order")
class OrderPricing:
    items_price: Float(required=True, min_value=0.0)
    tax_price: Float(required=True, min_value=0.0)
    shipping_price: Float(required=True, min_value=0.0)
    total_price: Float(required=True, min_value=0.0)

    @invariant.post
    def total_must_equal_sum_of_parts(self):
        expected = self.items_price + self.tax_price + self.shipping_price
        if abs(self.total_price - expected) > 0.005:
            raise ValidationError({"total_price": ["Total must equal items + tax + shipping"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line: a denormalized copy of the product at purchase time."""

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=1)
    image: String(max_length=MAX_IMAGE_URL_LENGTH, default="")


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id: Identifier(required=True)
    items: HasMany(OrderItem)
    shipping_address: ValueObject(ShippingAddress)
    payment_method: String(required=True, max_length=50)
    pricing: ValueObject(OrderPricing)
    is_paid: Boolean(default=False)
    paid_at: DateTime()
    is_delivered: Boolean(default=False)
    delivered_at: DateTime()
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_number: String(max_length=255)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def must_have_at_least_one_item(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    @classmethod
    def place(cls, user_id, items, shipping_address, payment_method, pricing):
        """Create an order from already-validated lines.

        Args:
            user_id: The buyer.
            items: List of dicts with product_id, name, price, quantity, image.
            shipping_address: Dict with address, city, postal_code, country.
            payment_method: Free-form payment method label.
            pricing: Dict with items_price, tax_price, shipping_price, total_price.
        """
        from storefront.order.events import OrderPlaced

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            items=[OrderItem(**item) for item in items],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            pricing=OrderPricing(**pricing),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=user_id,
                item_count=sum(item["quantity"] for item in items),
                items_price=order.pricing.items_price,
                total_price=order.pricing.total_price,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def update_status(self, status, tracking_number=None):
        from storefront.order.events import OrderDelivered, OrderStatusUpdated

        new_status = OrderStatus(status)
        previous = self.status
        now = datetime.now(UTC)

        self.status = new_status.value
        if tracking_number:
            self.tracking_number = tracking_number
        if new_status == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusUpdated(
                order_id=self.id,
                previous_status=previous,
                new_status=new_status.value,
                tracking_number=self.tracking_number,
            )
        )
        if new_status == OrderStatus.DELIVERED:
            self.raise_(OrderDelivered(order_id=self.id, delivered_at=now))

    def mark_paid(self):
        from storefront.order.events import OrderPaid

        if self.is_paid:
            raise ValidationError({"is_paid": ["Order is already paid"]})

        now = datetime.now(UTC)
        self.is_paid = True
        self.paid_at = now
        self.status = OrderStatus.PROCESSING.value
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=self.id,
                total_price=self.pricing.total_price,
                paid_at=now,
            )
        )
