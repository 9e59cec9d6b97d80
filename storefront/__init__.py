"""Storefront API: catalog, carts, orders and storefront content backed by MongoDB."""
