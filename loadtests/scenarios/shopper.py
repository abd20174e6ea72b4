"""Shopper load test scenarios.

A stateful SequentialTaskSet covering the buying journey. Steps execute in
order and each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import registration_data, search_term, shipping_address
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class ShopperJourney(SequentialTaskSet):
    """Register -> Browse -> Search -> Place Order -> My Orders -> Pay.

    Requires at least one active product with stock; the catalogue admin
    scenario creates them.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        with self.client.post(
            "/auth/register",
            json=registration_data(),
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Register failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get(
            "/products",
            params={"page": 1, "limit": 20},
            catch_response=True,
            name="GET /products",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code}")
                self.interrupt()
            self.state.product_ids = [p["id"] for p in resp.json()["products"] if p["stock"] > 0]
            if not self.state.product_ids:
                resp.success()
                self.interrupt()

    @task
    def search(self):
        self.client.get("/products/search", params={"q": search_term()}, name="GET /products/search")

    @task
    def place_order(self):
        chosen = random.sample(self.state.product_ids, k=min(2, len(self.state.product_ids)))
        payload = {
            "items": [{"product_id": product_id, "quantity": random.randint(1, 3)} for product_id in chosen],
            "shipping_address": shipping_address(),
            "payment_method": random.choice(["card", "paypal", "cash_on_delivery"]),
        }
        with self.client.post(
            "/orders",
            json=payload,
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Place order failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def my_orders(self):
        self.client.get("/orders/my-orders", headers=self.state.headers, name="GET /orders/my-orders")

    @task
    def pay(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/pay",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/pay",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Pay failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Locust user simulating shoppers."""

    wait_time = between(0.5, 2.0)
    tasks = [ShopperJourney]
