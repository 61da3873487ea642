"""
Storefront cart engine.

Server-side orchestration of a storefront shopping cart: loads or creates the
cart, mutates it, re-derives prices, discounts and taxes, merges carts on login
and persists the result through a remote cart store.
"""

__version__ = "0.1.0"
