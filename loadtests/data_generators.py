"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(EmailAddress VO, product ranges, shipping address) and match the field names
expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

# ---------- Users ----------


def valid_email() -> str:
    """Generate unique emails that pass EmailAddress VO validation."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:6]}@{domain}"


def registration_data() -> dict:
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "password": fake.password(length=12),
        "phone": fake.msisdn()[:30],
        "address": fake.address().replace("\n", ", ")[:500],
    }


def shipping_address() -> dict:
    return {
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "postal_code": fake.postcode()[:20],
        "country": fake.country()[:100],
    }


# ---------- Catalogue ----------


def category_data() -> dict:
    return {
        "name": f"{fake.word().title()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(),
        "image": fake.image_url(),
    }


def product_data(category_id: str) -> dict:
    """A product with enough stock for many shoppers to buy from it."""
    return {
        "name": fake.catch_phrase()[:255],
        "description": fake.paragraph(),
        "price": round(random.uniform(5, 250), 2),
        "discount_percentage": random.choice([0, 0, 5, 10, 20]),
        "images": [fake.image_url() for _ in range(random.randint(0, 3))],
        "category_id": category_id,
        "stock": random.randint(500, 5000),
        "specifications": {"color": fake.color_name(), "weight_g": random.randint(50, 2000)},
    }


def search_term() -> str:
    return fake.word()
