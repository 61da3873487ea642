"""
Shared pytest fixtures for all tests.

Provides in-process fakes for the remote collaborators (catalog, marketing,
tax), sample stores/customers/products, and a fully wired cart builder over
the in-memory cart store.
"""

import copy
import os
from decimal import Decimal

import pytest

from storefront.core.cache import LocalCacheManager
from storefront.core.domain import round_money
from storefront.domains.cart.application.dto import (
    PaymentMethodDto,
    ShippingMethodInfoDto,
    ShippingRateDto,
)
from storefront.domains.cart.application.services import CartBuilder
from storefront.domains.cart.infrastructure import InMemoryCartStore
from storefront.domains.catalog.application.dto import CatalogSearchResult
from storefront.domains.catalog.domain.entities import Inventory, Product, ProductPrice, TierPrice
from storefront.domains.catalog.domain.value_objects import ItemResponseGroup, PagedList
from storefront.domains.marketing.application.services import PromotionEvaluator
from storefront.domains.shared.domain import CustomerInfo, Store
from storefront.domains.tax.application.services import TaxEvaluator
from storefront.domains.tax.domain import TaxRate

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"


# ============================================================================
# PRODUCT HELPERS
# ============================================================================


def make_product(
    product_id: str,
    list_price: str = "20.00",
    sale_price: str | None = None,
    tier_prices: list[tuple[str, int]] | None = None,
    track_inventory: bool = False,
    in_stock: int | None = None,
    reserved: int | None = None,
    is_active: bool = True,
    is_buyable: bool = True,
    currency: str = "USD",
) -> Product:
    """Build a priced catalog product."""
    price = ProductPrice(
        currency=currency,
        list_price=Decimal(list_price),
        sale_price=Decimal(sale_price) if sale_price is not None else None,
        tier_prices=[TierPrice(price=Decimal(p), quantity=q) for p, q in (tier_prices or [])],
    )
    inventory = None
    if track_inventory:
        inventory = Inventory(product_id=product_id, in_stock_quantity=in_stock, reserved_quantity=reserved)
    return Product(
        id=product_id,
        sku=f"SKU-{product_id}",
        name=f"Product {product_id}",
        is_active=is_active,
        is_buyable=is_buyable,
        track_inventory=track_inventory,
        price=price,
        inventory=inventory,
    )


# ============================================================================
# FAKE COLLABORATORS
# ============================================================================


class FakeCatalogService:
    """ICatalogSearchService returning copies of registered products."""

    def __init__(self):
        self.products: dict[str, Product] = {}
        self.calls: list[tuple[list[str], ItemResponseGroup]] = []

    def add(self, *products: Product) -> None:
        for product in products:
            self.products[product.id] = product

    async def get_products(self, ids, response_group=ItemResponseGroup.NONE):
        self.calls.append((list(ids), response_group))
        return [copy.deepcopy(self.products[i]) for i in ids if i in self.products]

    async def get_categories(self, ids, response_group=None):
        return []

    async def search_products(self, criteria):
        items = list(self.products.values())
        return CatalogSearchResult(products=PagedList.from_superset(items, criteria.page_number, criteria.page_size))

    async def search_categories(self, criteria):
        return PagedList.empty()


class FakeMarketingApi:
    """IMarketingApi answering every evaluation with the configured rewards."""

    def __init__(self):
        self.rewards = []
        self.contexts = []

    async def evaluate_promotions(self, context):
        self.contexts.append(context)
        return list(self.rewards)


class FakeTaxApi:
    """ITaxApi charging a flat percentage of each line amount."""

    def __init__(self, percent_rate: Decimal = Decimal("0.10")):
        self.percent_rate = percent_rate
        self.contexts = []

    async def evaluate_taxes(self, context):
        self.contexts.append(context)
        return [
            TaxRate(
                line_id=line.id,
                line_type=line.line_type,
                rate=round_money(line.amount * self.percent_rate),
                percent_rate=self.percent_rate,
            )
            for line in context.lines
        ]


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def store() -> Store:
    return Store(id="electronics", name="Electronics", default_currency="USD", currencies=["USD", "EUR"])


@pytest.fixture
def anonymous_customer() -> CustomerInfo:
    return CustomerInfo.anonymous("anon-1")


@pytest.fixture
def registered_customer() -> CustomerInfo:
    return CustomerInfo(id="user-1", user_name="jdoe", full_name="John Doe", is_registered_user=True)


@pytest.fixture
def shipping_rates() -> list[ShippingRateDto]:
    fedex = ShippingMethodInfoDto(code="FedEx", name="FedEx", priority=1)
    return [
        ShippingRateDto(shipping_method=fedex, option_name="Ground", rate=Decimal("10.00")),
        ShippingRateDto(shipping_method=fedex, option_name="Express", rate=Decimal("25.00")),
    ]


@pytest.fixture
def payment_methods() -> list[PaymentMethodDto]:
    return [
        PaymentMethodDto(code="CreditCard", name="Credit card", priority=1),
        PaymentMethodDto(code="PayPal", name="PayPal", priority=2, price=Decimal("1.50")),
    ]


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def catalog_service() -> FakeCatalogService:
    catalog = FakeCatalogService()
    catalog.add(
        make_product("p-1", list_price="20.00", sale_price="18.00"),
        make_product("p-2", list_price="50.00", tier_prices=[("50.00", 1), ("45.00", 5)]),
        make_product("p-3", list_price="5.00"),
    )
    return catalog


@pytest.fixture
def marketing_api() -> FakeMarketingApi:
    return FakeMarketingApi()


@pytest.fixture
def tax_api() -> FakeTaxApi:
    return FakeTaxApi()


@pytest.fixture
def cart_store(shipping_rates, payment_methods) -> InMemoryCartStore:
    return InMemoryCartStore(shipping_rates=shipping_rates, payment_methods=payment_methods)


@pytest.fixture
def cache_manager() -> LocalCacheManager:
    return LocalCacheManager(region_ttls={"CartRegion": 300, "ApiRegion": 60})


@pytest.fixture
def make_cart_builder(cart_store, catalog_service, cache_manager, marketing_api, tax_api):
    """Factory for builders sharing the same store, cache and fakes (one per request)."""

    def factory() -> CartBuilder:
        return CartBuilder(
            cart_store=cart_store,
            catalog_service=catalog_service,
            cache_manager=cache_manager,
            promotion_evaluator=PromotionEvaluator(marketing_api),
            tax_evaluator=TaxEvaluator(tax_api),
        )

    return factory


@pytest.fixture
def cart_builder(make_cart_builder) -> CartBuilder:
    return make_cart_builder()


@pytest.fixture
def product_factory():
    """Expose ``make_product`` to test modules."""
    return make_product
