"""
Storefront bounded contexts: shared, catalog, marketing, tax and cart.
"""
