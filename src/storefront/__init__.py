"""Storefront: users, catalogue and orders on a single Protean domain."""
