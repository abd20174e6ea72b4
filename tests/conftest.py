import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    # Minimum bcrypt cost keeps hashing fast in tests
    os.environ.setdefault("BCRYPT_ROUNDS", "4")
    os.environ.setdefault("LOG_DIR", str(Path(session.config.rootpath) / "logs"))

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Data builders shared by application, integration and BDD tests
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user():
    from protean import current_domain

    from storefront.user.registration import RegisterUser

    def _make(email="shopper@example.com", password="secret-pass", name="Shopper", role="user"):
        return current_domain.process(
            RegisterUser(name=name, email=email, password=password, role=role),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def make_category():
    from protean import current_domain

    from storefront.category.management import CreateCategory

    def _make(name="Keyboards", is_active=True):
        return current_domain.process(CreateCategory(name=name, is_active=is_active), asynchronous=False)

    return _make


@pytest.fixture()
def make_product(make_category):
    from protean import current_domain

    from storefront.product.creation import CreateProduct

    def _make(name="Split Keyboard", price=50.0, stock=10, discount_percentage=0.0, category_id=None, **extra):
        if "images" in extra and not isinstance(extra["images"], str):
            extra["images"] = json.dumps(extra["images"])
        return current_domain.process(
            CreateProduct(
                name=name,
                price=price,
                stock=stock,
                discount_percentage=discount_percentage,
                category_id=category_id or make_category(),
                **extra,
            ),
            asynchronous=False,
        )

    return _make


# ---------------------------------------------------------------------------
# HTTP client for integration and BDD tests
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from fastapi import FastAPI, Request
    from fastapi.testclient import TestClient
    from protean.integrations.fastapi import register_exception_handlers

    from storefront.api import auth_router, category_router, order_router, product_router, user_router
    from storefront.domain import storefront

    app = FastAPI()

    @app.middleware("http")
    async def domain_context(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    for router in (auth_router, user_router, category_router, product_router, order_router):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def login(client, make_user):
    """Create an account with the given role and return its Authorization header."""

    def _login(email="shopper@example.com", role="user", password="secret-pass"):
        make_user(email=email, role=role, password=password)
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
