"""Marking orders as paid: command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class MarkOrderPaid:
    order_id: Identifier(required=True)


@storefront.command_handler(part_of=Order)
class MarkOrderPaidHandler:
    @handle(MarkOrderPaid)
    def mark_paid(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        order.mark_paid()
        repo.add(order)

        logger.info("order_paid", order_id=str(order.id), total_price=order.pricing.total_price)
