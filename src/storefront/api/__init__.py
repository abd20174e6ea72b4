"""Storefront HTTP API routers."""

import importlib

_ROUTER_MODULES = {
    "auth_router": "storefront.api.auth",
    "user_router": "storefront.api.users",
    "category_router": "storefront.api.catalogue",
    "product_router": "storefront.api.catalogue",
    "order_router": "storefront.api.orders",
}

__all__ = ["auth_router", "user_router", "category_router", "product_router", "order_router"]


def __getattr__(name):
    # Resolved lazily so the domain's module traversal, which loads the router
    # modules individually, does not hit a circular import through this package.
    if name in _ROUTER_MODULES:
        return getattr(importlib.import_module(_ROUTER_MODULES[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
