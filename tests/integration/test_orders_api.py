"""Integration tests for /orders endpoints, including ownership checks."""

import json

import pytest

ADDRESS = {
    "address": "221B Baker Street",
    "city": "London",
    "postal_code": "NW1 6XE",
    "country": "United Kingdom",
}


@pytest.fixture()
def product_id(make_product):
    return make_product(price=50.0, discount_percentage=20, stock=10)


def _place(client, headers, product_id, quantity=3):
    return client.post(
        "/orders",
        json={
            "items": [{"product_id": product_id, "quantity": quantity}],
            "shipping_address": ADDRESS,
            "payment_method": "card",
        },
        headers=headers,
    )


class TestPlaceOrderAPI:
    def test_place_order(self, client, shopper, product_id):
        response = _place(client, shopper, product_id)
        assert response.status_code == 201
        body = response.json()
        assert body["items_price"] == 120.0
        assert body["tax_price"] == 18.0
        assert body["shipping_price"] == 0.0
        assert body["total_price"] == 138.0
        assert body["status"] == "pending"
        assert body["items"][0]["price"] == 40.0

        assert client.get(f"/products/{product_id}").json()["stock"] == 7

    def test_requires_login(self, client, product_id):
        assert _place(client, {}, product_id).status_code == 401

    def test_out_of_stock(self, client, shopper, product_id):
        response = _place(client, shopper, product_id, quantity=11)
        assert response.status_code == 400
        assert client.get(f"/products/{product_id}").json()["stock"] == 10
        assert client.get("/orders/my-orders", headers=shopper).json() == []

    def test_empty_cart(self, client, shopper):
        response = client.post(
            "/orders",
            json={"items": [], "shipping_address": ADDRESS, "payment_method": "card"},
            headers=shopper,
        )
        assert response.status_code == 400

    def test_unknown_product(self, client, shopper):
        assert _place(client, shopper, "missing", quantity=1).status_code == 404

    def test_zero_quantity_fails_request_validation(self, client, shopper, product_id):
        assert _place(client, shopper, product_id, quantity=0).status_code == 422


class TestReadingOrders:
    def test_my_orders(self, client, shopper, login, product_id):
        other = login("other@example.com")
        _place(client, shopper, product_id, quantity=1)
        _place(client, other, product_id, quantity=1)

        mine = client.get("/orders/my-orders", headers=shopper).json()
        assert len(mine) == 1

    def test_owner_reads_own_order(self, client, shopper, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        assert client.get(f"/orders/{order_id}", headers=shopper).status_code == 200

    def test_other_user_is_forbidden(self, client, shopper, login, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        other = login("other@example.com")
        assert client.get(f"/orders/{order_id}", headers=other).status_code == 403

    def test_admin_reads_any_order(self, client, shopper, admin, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        assert client.get(f"/orders/{order_id}", headers=admin).status_code == 200

    def test_unknown_order(self, client, shopper):
        assert client.get("/orders/missing", headers=shopper).status_code == 404

    def test_listing_all_orders_is_admin_only(self, client, shopper, admin, product_id):
        _place(client, shopper, product_id, quantity=1)
        assert client.get("/orders", headers=shopper).status_code == 403

        body = client.get("/orders", headers=admin).json()
        assert body["total"] == 1
        assert len(body["orders"]) == 1
        assert body["page"] == 1
        assert body["limit"] == 10

    def test_listing_all_orders_is_paginated(self, client, shopper, admin, make_product):
        product_id = make_product(price=5.0, stock=50)
        for _ in range(12):
            _place(client, shopper, product_id, quantity=1)

        first = client.get("/orders", params={"page": 1, "limit": 5}, headers=admin).json()
        last = client.get("/orders", params={"page": 3, "limit": 5}, headers=admin).json()

        assert first["total"] == 12
        assert len(first["orders"]) == 5
        assert len(last["orders"]) == 2
        assert not {o["id"] for o in first["orders"]} & {o["id"] for o in last["orders"]}

    def test_my_orders_returns_every_order(self, client, shopper, make_product):
        from protean import current_domain

        from storefront.order.placement import PlaceOrder

        product_id = make_product(price=1.0, stock=200)
        user_id = client.get("/users/profile", headers=shopper).json()["id"]
        for _ in range(105):
            current_domain.process(
                PlaceOrder(
                    user_id=user_id,
                    items=json.dumps([{"product_id": product_id, "quantity": 1}]),
                    shipping_address=json.dumps(ADDRESS),
                    payment_method="card",
                ),
                asynchronous=False,
            )

        assert len(client.get("/orders/my-orders", headers=shopper).json()) == 105

    def test_order_for_product_with_long_image_url(self, client, shopper, make_product):
        image = "https://cdn.example.com/" + "a" * 470
        product_id = make_product(stock=3, images=[image])

        response = _place(client, shopper, product_id, quantity=1)

        assert response.status_code == 201
        assert response.json()["items"][0]["image"] == image


class TestStatusAndPayment:
    def test_admin_ships_and_delivers(self, client, shopper, admin, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]

        shipped = client.put(
            f"/orders/{order_id}/status",
            json={"status": "shipped", "tracking_number": "1Z999"},
            headers=admin,
        )
        assert shipped.json()["tracking_number"] == "1Z999"
        assert shipped.json()["is_delivered"] is False

        delivered = client.put(f"/orders/{order_id}/status", json={"status": "delivered"}, headers=admin)
        assert delivered.json()["is_delivered"] is True
        assert delivered.json()["delivered_at"] is not None

    def test_shopper_cannot_change_status(self, client, shopper, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        response = client.put(f"/orders/{order_id}/status", json={"status": "delivered"}, headers=shopper)
        assert response.status_code == 403

    def test_invalid_status(self, client, shopper, admin, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        response = client.put(f"/orders/{order_id}/status", json={"status": "lost"}, headers=admin)
        assert response.status_code == 422

    def test_owner_pays(self, client, shopper, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        response = client.put(f"/orders/{order_id}/pay", headers=shopper)
        assert response.status_code == 200
        assert response.json()["is_paid"] is True
        assert response.json()["status"] == "processing"

    def test_paying_twice(self, client, shopper, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        client.put(f"/orders/{order_id}/pay", headers=shopper)
        assert client.put(f"/orders/{order_id}/pay", headers=shopper).status_code == 400

    def test_stranger_cannot_pay(self, client, shopper, login, product_id):
        order_id = _place(client, shopper, product_id).json()["id"]
        other = login("other@example.com")
        assert client.put(f"/orders/{order_id}/pay", headers=other).status_code == 403
