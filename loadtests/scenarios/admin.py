"""Catalogue admin load test scenarios.

Admin credentials come from LOADTEST_ADMIN_EMAIL / LOADTEST_ADMIN_PASSWORD;
create the account beforehand with `python src/manage.py create-super-admin`.
"""

import os
import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import category_data, product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState


class CatalogueAdminJourney(SequentialTaskSet):
    """Login -> Create Category -> Create Product -> Restock -> List All."""

    def on_start(self):
        self.state = AdminState()

    @task
    def login(self):
        credentials = {
            "email": os.getenv("LOADTEST_ADMIN_EMAIL", "admin@example.com"),
            "password": os.getenv("LOADTEST_ADMIN_PASSWORD", "change-me"),
        }
        with self.client.post("/auth/login", json=credentials, catch_response=True, name="POST /auth/login") as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Admin login failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_category(self):
        with self.client.post(
            "/categories",
            json=category_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_id = resp.json()["id"]
            else:
                resp.failure(f"Create category failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_product(self):
        with self.client.post(
            "/products",
            json=product_data(self.state.category_id),
            headers=self.state.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["id"]
            else:
                resp.failure(f"Create product failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def restock(self):
        with self.client.put(
            f"/products/{self.state.product_id}",
            json={"stock": random.randint(1000, 5000)},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Restock failed: {extract_error_detail(resp)}")

    @task
    def list_all(self):
        self.client.get("/products/admin", headers=self.state.headers, name="GET /products/admin")

    @task
    def done(self):
        self.interrupt()


class CatalogueAdminUser(HttpUser):
    """Locust user simulating catalogue administrators."""

    wait_time = between(1.0, 3.0)
    tasks = [CatalogueAdminJourney]
