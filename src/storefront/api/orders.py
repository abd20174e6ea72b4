"""Order routes: placement, history, status and payment."""

import json

from fastapi import APIRouter, Depends, HTTPException, status
from protean.utils.globals import current_domain

from storefront.api.pagination import Page, page_params
from storefront.api.schemas import OrderResponse, PaginatedOrders, PlaceOrderRequest, UpdateOrderStatusRequest
from storefront.auth.guards import admin_only, current_user
from storefront.order.order import Order
from storefront.order.payment import MarkOrderPaid
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.user.user import User

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _load(order_id: str) -> Order:
    return current_domain.repository_for(Order).get(order_id)


def _owned_or_staff(order: Order, user: User) -> Order:
    if not (user.is_staff or order.is_owned_by(user.id)):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to access this order")
    return order


@order_router.get("", response_model=PaginatedOrders)
async def list_orders(paging: Page = Depends(page_params), _: User = Depends(admin_only)) -> PaginatedOrders:
    results = current_domain.repository_for(Order).list_page(paging.page, paging.limit)
    return PaginatedOrders(
        orders=[OrderResponse.from_order(order) for order in results.items],
        total=results.total,
        page=paging.page,
        limit=paging.limit,
    )


@order_router.get("/my-orders", response_model=list[OrderResponse])
async def my_orders(user: User = Depends(current_user)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).list_for_user(str(user.id))
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    return OrderResponse.from_order(_owned_or_staff(_load(order_id), user))


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, user: User = Depends(current_user)) -> OrderResponse:
    command = PlaceOrder(
        user_id=str(user.id),
        items=json.dumps([line.model_dump() for line in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(_load(order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, _: User = Depends(admin_only)
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status.value,
        tracking_number=body.tracking_number,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(_load(order_id))


@order_router.put("/{order_id}/pay", response_model=OrderResponse)
async def pay_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    _owned_or_staff(_load(order_id), user)
    current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)
    return OrderResponse.from_order(_load(order_id))
