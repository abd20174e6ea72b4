"""Event store verification tests.

These tests verify that events raised by aggregates are written to the event
store when the unit of work around a command handler commits. Downstream
consumers (mailers, analytics) read these streams, so the message type and
payload are checked alongside the count.
"""

import json

from protean import current_domain

from storefront.auth.login import LogIn
from storefront.order.payment import MarkOrderPaid
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.user.registration import RegisterUser
from storefront.user.verification import RequestPasswordReset


def _messages_of_type(stream, event_type):
    messages = current_domain.event_store.store.read(stream)
    return [
        m for m in messages if m.metadata and m.metadata.headers and m.metadata.headers.type == event_type
    ]


def _place_order(user_id, product_id, quantity=1):
    return current_domain.process(
        PlaceOrder(
            user_id=user_id,
            items=json.dumps([{"product_id": product_id, "quantity": quantity}]),
            shipping_address=json.dumps(
                {"address": "1 Main St", "city": "Springfield", "postal_code": "12345", "country": "US"}
            ),
            payment_method="card",
        ),
        asynchronous=False,
    )


class TestUserEvents:
    def test_registration_stores_user_registered(self):
        user_id = current_domain.process(
            RegisterUser(name="Grace", email="Grace@Example.com", password="compiler"),
            asynchronous=False,
        )

        events = _messages_of_type("storefront::user", "Storefront.UserRegistered.v1")
        assert len(events) == 1
        assert events[0].data["user_id"] == user_id
        assert events[0].data["email"] == "grace@example.com"
        assert events[0].data["role"] == "user"

    def test_login_stores_user_logged_in(self, make_user):
        user_id = make_user(email="login@example.com", password="secret-pass")

        current_domain.process(LogIn(email="login@example.com", password="secret-pass"), asynchronous=False)

        events = _messages_of_type("storefront::user", "Storefront.UserLoggedIn.v1")
        assert len(events) == 1
        assert events[0].data["user_id"] == user_id

    def test_password_reset_request_does_not_carry_the_token(self, make_user):
        make_user(email="forgetful@example.com")

        current_domain.process(RequestPasswordReset(email="forgetful@example.com"), asynchronous=False)

        events = _messages_of_type("storefront::user", "Storefront.PasswordResetRequested.v1")
        assert len(events) == 1
        assert "password_reset_token" not in events[0].data
        assert "token" not in events[0].data


class TestCatalogueEvents:
    def test_product_creation_stores_product_created(self, make_product):
        product_id = make_product(name="Trackball", price=30.0, stock=4)

        events = _messages_of_type("storefront::product", "Storefront.ProductCreated.v1")
        assert len(events) == 1
        assert events[0].data["product_id"] == product_id

    def test_category_creation_stores_category_created(self, make_category):
        category_id = make_category(name="Mice")

        events = _messages_of_type("storefront::category", "Storefront.CategoryCreated.v1")
        assert len(events) == 1
        assert events[0].data["category_id"] == category_id


class TestOrderEvents:
    def test_placement_stores_order_and_stock_events(self, make_user, make_product):
        user_id = make_user()
        product_id = make_product(price=50.0, stock=5)

        order_id = _place_order(user_id, product_id, quantity=2)

        placed = _messages_of_type("storefront::order", "Storefront.OrderPlaced.v1")
        assert len(placed) == 1
        assert placed[0].data["order_id"] == order_id

        decremented = _messages_of_type("storefront::product", "Storefront.StockDecremented.v1")
        assert len(decremented) == 1
        assert decremented[0].data["product_id"] == product_id

    def test_delivery_stores_status_and_delivered_events(self, make_user, make_product):
        order_id = _place_order(make_user(), make_product())

        current_domain.process(UpdateOrderStatus(order_id=order_id, status="delivered"), asynchronous=False)

        assert len(_messages_of_type("storefront::order", "Storefront.OrderStatusUpdated.v1")) == 1
        assert len(_messages_of_type("storefront::order", "Storefront.OrderDelivered.v1")) == 1

    def test_payment_stores_order_paid(self, make_user, make_product):
        order_id = _place_order(make_user(), make_product())

        current_domain.process(MarkOrderPaid(order_id=order_id), asynchronous=False)

        events = _messages_of_type("storefront::order", "Storefront.OrderPaid.v1")
        assert len(events) == 1
        assert events[0].data["order_id"] == order_id
