import pytest


@pytest.fixture()
def shopper(login):
    return login("shopper@example.com")


@pytest.fixture()
def admin(login):
    return login("admin@example.com", role="admin")


@pytest.fixture()
def super_admin(login):
    return login("root@example.com", role="super_admin")
