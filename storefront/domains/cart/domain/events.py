"""
Cart domain events.
"""

from dataclasses import dataclass

from storefront.core.domain import DomainEvent
from storefront.domains.cart.domain.entities import Cart
from storefront.domains.shared.domain import CustomerInfo, Store


@dataclass(frozen=True)
class UserLoginEvent(DomainEvent):
    """
    A visitor signed in.

    ``prev_user_cart`` is the cart the visitor held before signing in (if
    any); when that visitor was anonymous its items move to ``new_user``'s cart.
    """

    store: Store | None = None
    language: str | None = None
    currency: str | None = None
    prev_user: CustomerInfo | None = None
    prev_user_cart: Cart | None = None
    new_user: CustomerInfo | None = None
