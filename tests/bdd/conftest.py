"""Shared BDD fixtures and step definitions for the Storefront domain."""

import pytest
from pytest_bdd import given, parsers



@pytest.fixture()
def catalogue():
    """Product ids by name, filled in by Given steps."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the result or captured error of a When step."""
    return {"order_id": None, "exc": None, "response": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse(
        'a product "{name}" priced {price:f} with a {discount:d}% discount and {stock:d} in stock'
    )
)
def product_in_catalogue(catalogue, make_category, make_product, name, price, discount, stock):
    if "__category__" not in catalogue:
        catalogue["__category__"] = make_category()
    catalogue[name] = make_product(
        name=name,
        price=price,
        discount_percentage=discount,
        stock=stock,
        category_id=catalogue["__category__"],
    )
