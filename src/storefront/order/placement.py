"""Order placement: command and handler.

Every line is validated against current stock before anything is written.
The order and all stock decrements are then persisted in the handler's unit
of work, so they commit together or not at all.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.order.pricing import price_order
from storefront.product.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """`items` is a JSON list of {product_id, quantity}; `shipping_address` a
    JSON object with address, city, postal_code and country."""

    user_id: Identifier(required=True)
    items: Text(required=True)
    shipping_address: Text(required=True)
    payment_method: String(required=True, max_length=50)


def merge_lines(items):
    """Collapse lines naming the same product, summing quantities, in first-seen order."""
    merged = {}
    for line in items:
        product_id = str(line["product_id"])
        quantity = int(line["quantity"])
        if quantity < 1:
            raise ValidationError({"items": ["Quantity must be at least 1"]})
        merged[product_id] = merged.get(product_id, 0) + quantity
    return list(merged.items())


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items)
        if not items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        product_repo = current_domain.repository_for(Product)

        # Validate every line before writing anything
        lines = []
        for product_id, quantity in merge_lines(items):
            product = product_repo.get(product_id)
            if quantity > product.stock:
                logger.info(
                    "order_rejected_out_of_stock",
                    product_id=product_id,
                    requested=quantity,
                    available=product.stock,
                )
                raise ValidationError({"items": [f"Product {product.name} is out of stock"]})
            lines.append((product, quantity))

        snapshot = [
            {
                "product_id": str(product.id),
                "name": product.name,
                "price": product.effective_price(),
                "quantity": quantity,
                "image": product.primary_image(),
            }
            for product, quantity in lines
        ]
        pricing = price_order((item["price"], item["quantity"]) for item in snapshot)

        order = Order.place(
            user_id=command.user_id,
            items=snapshot,
            shipping_address=json.loads(command.shipping_address),
            payment_method=command.payment_method,
            pricing=pricing,
        )
        current_domain.repository_for(Order).add(order)

        for product, quantity in lines:
            product.decrement_stock(quantity)
            product_repo.add(product)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            lines=len(lines),
            total_price=pricing["total_price"],
        )
        return str(order.id)
