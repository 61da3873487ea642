"""
Cart Builder

Owns one in-memory cart aggregate for the duration of a request and keeps
its derived state (prices, discounts, taxes, validity) consistent with the
remote cart store, catalog, marketing and tax services.

Ordering rules:
- A freshly loaded cart is evaluated (promotions, then taxes) before it is
  cached and handed out; a cache hit is not re-evaluated.
- Promotions are always evaluated before taxes, so taxes apply to
  discounted amounts.
- Saving invalidates the cached copies first, then evaluates, persists and
  replaces the aggregate with the stored copy.
- A login merge deletes the anonymous cart only after the merged cart saved.

A builder is not safe for concurrent use; give each request its own.
"""

import asyncio
import copy

from storefront.core.cache import LocalCacheManager
from storefront.core.domain import (
    CartNotLoadedException,
    IntegrationException,
    UnknownPaymentMethodException,
    UnknownShipmentMethodException,
)
from storefront.core.shared import get_logger
from storefront.domains.cart.application.converters import (
    to_cart_dto,
    to_payment_method,
    to_shipping_method,
    to_shopping_cart,
)
from storefront.domains.cart.application.dto import CartSearchCriteria
from storefront.domains.cart.application.ports import ICartStore
from storefront.domains.cart.domain import (
    Cart,
    Coupon,
    LineItem,
    Payment,
    PaymentMethod,
    PriceError,
    QuantityError,
    QuoteRequest,
    Shipment,
    ShippingMethod,
    UnavailableError,
    UserLoginEvent,
)
from storefront.domains.catalog.application.ports import ICatalogSearchService
from storefront.domains.catalog.domain.entities import Product
from storefront.domains.catalog.domain.value_objects import ItemResponseGroup
from storefront.domains.marketing.application.ports import IPromotionEvaluator
from storefront.domains.shared.domain import CustomerInfo, Store
from storefront.domains.tax.application.ports import ITaxEvaluator

logger = get_logger(__name__, {"component": "cart_builder"})

CACHE_KEY_PREFIX = "CartBuilder"
VALIDATION_CACHE_KEY_PREFIX = "CartBuilder.ValidateCartItemsAsync"

VALIDATION_RESPONSE_GROUP = (
    ItemResponseGroup.ITEM_WITH_PRICES | ItemResponseGroup.ITEM_WITH_DISCOUNTS | ItemResponseGroup.INVENTORY
)


def cart_cache_key(store_id: str, cart_name: str, customer_id: str, currency: str) -> str:
    """Natural cache key of a cart (case-insensitive)."""
    return f"{CACHE_KEY_PREFIX}:" + ":".join([store_id, cart_name, customer_id, currency]).lower()


def cart_id_cache_key(cart_id: str) -> str:
    return f"{CACHE_KEY_PREFIX}:{cart_id}"


class CartBuilder:
    """
    Cart aggregation engine.

    Example:
        ```python
        builder = container.create_cart_builder()
        await builder.load_or_create("default", store, customer, "en-US", "USD")
        await builder.add_item(product, 2)
        await builder.add_or_update_shipment(Shipment(shipment_method_code="FedEx", shipment_method_option="Ground"))
        await builder.save()
        builder.cart.total
        ```
    """

    def __init__(
        self,
        cart_store: ICartStore,
        catalog_service: ICatalogSearchService,
        cache_manager: LocalCacheManager,
        promotion_evaluator: IPromotionEvaluator,
        tax_evaluator: ITaxEvaluator,
        cart_region: str = "CartRegion",
        api_region: str = "ApiRegion",
        default_cart_name: str = "default",
        anonymous_username: str = "Anonymous",
    ):
        """
        Initialize the builder with its collaborators.

        Args:
            cart_store: Remote cart store
            catalog_service: Product lookup (repricing, validation)
            cache_manager: Shared get-or-compute cache
            promotion_evaluator: Applies promotion rewards
            tax_evaluator: Applies tax rates
            cart_region: Cache region for carts
            api_region: Cache region for remote lookups made during validation
            default_cart_name: Name given to new carts when none is requested
            anonymous_username: Customer name recorded on anonymous carts
        """
        self._cart_store = cart_store
        self._catalog_service = catalog_service
        self._cache = cache_manager
        self._promotion_evaluator = promotion_evaluator
        self._tax_evaluator = tax_evaluator
        self._cart_region = cart_region
        self._api_region = api_region
        self._default_cart_name = default_cart_name
        self._anonymous_username = anonymous_username
        self._cart: Cart | None = None

    # ==================== Binding ====================

    @property
    def cart(self) -> Cart | None:
        """Bound cart, or None before load/create."""
        return self._cart

    def take_cart(self, cart: Cart) -> "CartBuilder":
        """Bind an existing cart aggregate."""
        self._cart = cart
        return self

    def _ensure_cart(self, operation: str) -> Cart:
        if self._cart is None:
            raise CartNotLoadedException(operation)
        return self._cart

    # ==================== Load / create ====================

    async def load_or_create(
        self,
        cart_name: str | None,
        store: Store,
        customer: CustomerInfo,
        language: str,
        currency: str,
    ) -> Cart:
        """
        Bind the customer's cart, loading it from cache or the cart store, or
        creating a transient one.

        A cart that did not come from the cache is evaluated before it is
        cached, so concurrent callers waiting on the same key only ever get an
        evaluated cart.
        """
        cart_name = cart_name or self._default_cart_name
        cache_key = cart_cache_key(store.id, cart_name, customer.id, currency)
        computed = False

        async def load() -> Cart:
            nonlocal computed
            computed = True

            criteria = CartSearchCriteria(
                store_id=store.id,
                customer_id=customer.id,
                name=cart_name,
                currency=currency,
            )
            search_result = await self._cart_store.search_carts(criteria)
            if search_result.results:
                cart = to_shopping_cart(search_result.results[0], currency, language)
                logger.info("Loaded cart", cart_id=cart.id, customer_id=customer.id)
            else:
                cart = self._create_cart(cart_name, store, customer, language, currency)
                logger.info("Created transient cart", cart_name=cart_name, customer_id=customer.id)
            cart.customer = customer

            await self._evaluate_promotions(cart)
            await self._evaluate_taxes(cart)
            return cart

        self._cart = await self._cache.get_or_compute(cache_key, self._cart_region, load)
        if not computed:
            logger.debug("Cart cache hit", cache_key=cache_key)
        return self._cart

    def _create_cart(
        self, cart_name: str, store: Store, customer: CustomerInfo, language: str, currency: str
    ) -> Cart:
        return Cart(
            store_id=store.id,
            name=cart_name,
            customer_id=customer.id,
            customer_name=customer.user_name if customer.is_registered_user else self._anonymous_username,
            is_anonymous=not customer.is_registered_user,
            language=language,
            currency=currency,
        )

    # ==================== Line items ====================

    async def add_item(self, product: Product, quantity: int) -> None:
        """Add a product; an existing line for the same product grows instead."""
        cart = self._ensure_cart("add_item")
        line_item = LineItem.from_product(product, cart.currency, cart.language, quantity)
        await self._add_line_item(line_item)

    async def _add_line_item(self, line_item: LineItem) -> None:
        cart = self._ensure_cart("add_item")
        existing = cart.find_item_by_product(line_item.product_id)
        if existing is not None:
            await self._change_item_quantity(existing, existing.quantity + max(1, line_item.quantity))
        else:
            line_item.id = None
            cart.items.append(line_item)

    async def change_item_quantity(self, line_item_id: str, quantity: int) -> None:
        cart = self._ensure_cart("change_item_quantity")
        line_item = cart.find_item(line_item_id)
        if line_item is not None:
            await self._change_item_quantity(line_item, quantity)

    async def change_item_quantity_at(self, index: int, quantity: int) -> None:
        cart = self._ensure_cart("change_item_quantity_at")
        if 0 <= index < len(cart.items):
            await self._change_item_quantity(cart.items[index], quantity)

    async def change_items_quantities(self, quantities: list[int]) -> None:
        """Change quantities positionally; non-positive entries are skipped."""
        cart = self._ensure_cart("change_items_quantities")
        for line_item, quantity in zip(list(cart.items), quantities):
            if quantity > 0:
                await self._change_item_quantity(line_item, quantity)

    async def _change_item_quantity(self, line_item: LineItem, quantity: int) -> None:
        cart = self._ensure_cart("change_item_quantity")
        if line_item.is_read_only:
            return

        products = await self._catalog_service.get_products(
            [line_item.product_id], ItemResponseGroup.ITEM_WITH_PRICES
        )
        product = next(iter(products), None)
        if product is not None and product.price is not None:
            line_item.reprice(product.price.get_tier_price(quantity))

        if quantity > 0:
            line_item.quantity = quantity
        else:
            cart.items.remove(line_item)

    async def remove_item(self, line_item_id: str) -> None:
        cart = self._ensure_cart("remove_item")
        line_item = cart.find_item(line_item_id)
        if line_item is not None:
            cart.items.remove(line_item)

    async def clear(self) -> None:
        """Remove every line item."""
        cart = self._ensure_cart("clear")
        cart.items.clear()

    # ==================== Coupon ====================

    async def add_or_update_coupon(self, code: str) -> None:
        """Set the coupon; it is checked by the next promotion evaluation."""
        cart = self._ensure_cart("add_or_update_coupon")
        cart.coupon = Coupon(code=code)

    async def remove_coupon(self) -> None:
        cart = self._ensure_cart("remove_coupon")
        cart.coupon = None

    # ==================== Shipments / payments ====================

    async def add_or_update_shipment(self, shipment: Shipment) -> None:
        """
        Add a shipment, replacing the stored shipment with the same id.

        When a method code is given it must match one of the available
        shipping methods (code and option); the shipment takes its price from
        that method. An unknown method fails before the cart is touched.
        """
        cart = self._ensure_cart("add_or_update_shipment")

        method: ShippingMethod | None = None
        if shipment.shipment_method_code:
            available = await self.list_shipping_methods()
            method = next((candidate for candidate in available if shipment.has_same_method(candidate)), None)
            if method is None:
                logger.warning(
                    "Unknown shipment method",
                    cart_id=cart.id,
                    code=shipment.shipment_method_code,
                    option=shipment.shipment_method_option,
                )
                raise UnknownShipmentMethodException(shipment.shipment_method_code, shipment.shipment_method_option)

        if not shipment.is_transient():
            existing = cart.find_shipment(shipment.id)
            if existing is not None:
                cart.shipments.remove(existing)

        shipment.currency = cart.currency
        if method is not None:
            shipment.apply_method(method)
        cart.shipments.append(shipment)

    async def remove_shipment(self, shipment_id: str) -> None:
        cart = self._ensure_cart("remove_shipment")
        shipment = cart.find_shipment(shipment_id)
        if shipment is not None:
            cart.shipments.remove(shipment)

    async def add_or_update_payment(self, payment: Payment) -> None:
        """Payment counterpart of ``add_or_update_shipment`` (matched by gateway code)."""
        cart = self._ensure_cart("add_or_update_payment")

        method: PaymentMethod | None = None
        if payment.payment_gateway_code:
            code = payment.payment_gateway_code.lower()
            available = await self.list_payment_methods()
            method = next((candidate for candidate in available if candidate.code.lower() == code), None)
            if method is None:
                logger.warning("Unknown payment method", cart_id=cart.id, code=payment.payment_gateway_code)
                raise UnknownPaymentMethodException(payment.payment_gateway_code)

        if not payment.is_transient():
            existing = cart.find_payment(payment.id)
            if existing is not None:
                cart.payments.remove(existing)

        payment.currency = cart.currency
        if method is not None:
            payment.apply_method(method)
        cart.payments.append(payment)

    async def list_shipping_methods(self) -> list[ShippingMethod]:
        """
        Shipping methods available for the bound cart, with promotions and
        taxes applied to each candidate. The cart itself is not modified.
        """
        cart = self._ensure_cart("list_shipping_methods")
        rates = await self._cart_store.get_available_shipping_rates(cart.id)
        methods = sorted(
            (to_shipping_method(rate, cart.currency) for rate in rates), key=lambda method: method.priority
        )
        if methods:
            await self._promotion_evaluator.evaluate_discounts(cart.to_promotion_evaluation_context(), methods)

            tax_context = cart.to_tax_evaluation_context()
            tax_context.lines = [method.to_tax_line() for method in methods]
            await self._tax_evaluator.evaluate_taxes(tax_context, methods)
        return methods

    async def list_payment_methods(self) -> list[PaymentMethod]:
        """Payment methods available for the bound cart, evaluated like shipping methods."""
        cart = self._ensure_cart("list_payment_methods")
        dtos = await self._cart_store.get_available_payment_methods(cart.id)
        methods = sorted(
            (to_payment_method(dto, cart.currency) for dto in dtos), key=lambda method: method.priority
        )
        if methods:
            await self._promotion_evaluator.evaluate_discounts(cart.to_promotion_evaluation_context(), methods)

            tax_context = cart.to_tax_evaluation_context()
            tax_context.lines = [method.to_tax_line() for method in methods]
            await self._tax_evaluator.evaluate_taxes(tax_context, methods)
        return methods

    # ==================== Merge / quotes ====================

    async def merge_with_cart(self, other: Cart) -> None:
        """
        Merge another cart into the bound one.

        Line items are added through the merge-add path (quantities combine);
        coupon, shipments and payments replace the bound cart's own.
        """
        cart = self._ensure_cart("merge_with_cart")
        for line_item in other.items:
            await self._add_line_item(copy.deepcopy(line_item))

        cart.coupon = copy.deepcopy(other.coupon)

        cart.shipments = []
        for shipment in other.shipments:
            shipment = copy.deepcopy(shipment)
            shipment.id = None
            cart.shipments.append(shipment)

        cart.payments = []
        for payment in other.payments:
            payment = copy.deepcopy(payment)
            payment.id = None
            cart.payments.append(payment)

    async def fill_from_quote_request(self, quote_request: QuoteRequest) -> None:
        """
        Replace the cart content with an accepted quote.

        Items get the quoted prices and become read-only. When a shipping quote
        was requested the shipments are replaced by one shipment, carrying the
        quoted method and price if that method code is still offered. The
        payments are replaced by one payment for the quote's grand total.
        """
        cart = self._ensure_cart("fill_from_quote_request")
        product_ids = [item.product_id for item in quote_request.items]
        products = await self._catalog_service.get_products(product_ids, ItemResponseGroup.ITEM_LARGE)

        cart.items.clear()
        for product in products:
            quote_item = next((item for item in quote_request.items if item.product_id == product.id), None)
            if quote_item is None:
                continue
            line_item = LineItem.from_product(
                product, cart.currency, cart.language, quote_item.selected_tier_price.quantity
            )
            line_item.list_price = quote_item.list_price
            line_item.sale_price = quote_item.selected_tier_price.price
            line_item.ensure_list_price_not_below_sale_price()
            line_item.is_read_only = True
            await self._add_line_item(line_item)

        if quote_request.request_shipping_quote:
            cart.shipments.clear()
            shipment = Shipment(currency=cart.currency, delivery_address=quote_request.shipping_address)
            quoted_method = quote_request.shipment_method
            if quoted_method is not None:
                available = await self.list_shipping_methods()
                code = quoted_method.shipment_method_code.lower()
                if any(method.shipment_method_code.lower() == code for method in available):
                    shipment.shipment_method_code = quoted_method.shipment_method_code
                    shipment.shipment_method_option = quoted_method.option_name
                    shipment.price = quoted_method.price
            cart.shipments.append(shipment)

        cart.payments.clear()
        cart.payments.append(
            Payment(
                currency=cart.currency,
                amount=quote_request.grand_total_incl_tax,
                billing_address=quote_request.billing_address,
            )
        )
        logger.info("Filled cart from quote request", cart_id=cart.id, quote_request_id=quote_request.id)

    # ==================== Validation ====================

    async def validate(self) -> bool:
        """
        Re-validate items and shipments and set ``cart.is_valid``.

        Returns:
            The new validity flag
        """
        cart = self._ensure_cart("validate")
        await asyncio.gather(self._validate_items(cart), self._validate_shipments(cart))

        cart.is_valid = all(item.is_valid for item in cart.items) and all(
            shipment.is_valid for shipment in cart.shipments
        )
        return cart.is_valid

    async def _validate_items(self, cart: Cart) -> None:
        if not cart.items:
            return

        product_ids = [item.product_id for item in cart.items]
        cache_key = f"{VALIDATION_CACHE_KEY_PREFIX}:{cart.id or ''}:" + ":".join(product_ids)
        products = await self._cache.get_or_compute(
            cache_key,
            self._api_region,
            lambda: self._catalog_service.get_products(product_ids, VALIDATION_RESPONSE_GROUP),
        )
        by_id = {product.id: product for product in products}

        for line_item in list(cart.items):
            line_item.clear_validation()
            product = by_id.get(line_item.product_id)

            if product is None or not product.is_available:
                line_item.add_validation_error(UnavailableError())
                continue

            if product.track_inventory and product.inventory is not None:
                available_quantity = product.inventory.available_quantity
                if available_quantity is not None and line_item.quantity > available_quantity:
                    line_item.add_validation_error(QuantityError(available_quantity=available_quantity))

            if product.price is not None:
                tier_price = product.price.get_tier_price(line_item.quantity)
                if tier_price.price > line_item.sale_price:
                    line_item.add_validation_error(
                        PriceError(
                            old_price=line_item.sale_price,
                            old_price_with_tax=line_item.sale_price_with_tax,
                            new_price=tier_price.price,
                            new_price_with_tax=tier_price.price_with_tax,
                        ),
                        invalidates=False,
                    )

    async def _validate_shipments(self, cart: Cart) -> None:
        if not cart.shipments:
            return

        available = await self.list_shipping_methods()
        for shipment in list(cart.shipments):
            shipment.clear_validation()
            method = next((candidate for candidate in available if shipment.has_same_method(candidate)), None)
            if method is None:
                shipment.add_validation_error(UnavailableError())
            elif method.price != shipment.price:
                shipment.add_validation_error(
                    PriceError(
                        old_price=shipment.price,
                        old_price_with_tax=shipment.price_with_tax,
                        new_price=method.price,
                        new_price_with_tax=method.price_with_tax,
                    ),
                    invalidates=False,
                )

    # ==================== Evaluation ====================

    async def evaluate_promotions(self) -> None:
        await self._evaluate_promotions(self._ensure_cart("evaluate_promotions"))

    async def evaluate_taxes(self) -> None:
        await self._evaluate_taxes(self._ensure_cart("evaluate_taxes"))

    async def _evaluate_promotions(self, cart: Cart) -> None:
        logger.debug("Evaluating promotions", cart_id=cart.id)
        await self._promotion_evaluator.evaluate_discounts(cart.to_promotion_evaluation_context(), [cart])

    async def _evaluate_taxes(self, cart: Cart) -> None:
        logger.debug("Evaluating taxes", cart_id=cart.id)
        await self._tax_evaluator.evaluate_taxes(cart.to_tax_evaluation_context(), [cart])

    # ==================== Login merge ====================

    async def on_user_login(self, event: UserLoginEvent) -> None:
        """
        Move an anonymous visitor's cart into the signed-in user's cart.

        No-op unless the previous user was anonymous and held items. The
        anonymous cart is deleted only after the merged cart was saved.
        """
        prev_user = event.prev_user
        prev_cart = event.prev_user_cart
        if prev_user is None or prev_user.is_registered_user or prev_cart is None or not prev_cart.items:
            return
        if event.store is None or event.new_user is None:
            return

        log = logger.with_context(anonymous_cart_id=prev_cart.id, customer_id=event.new_user.id)
        log.info("Merging anonymous cart into user cart")
        await self.load_or_create(
            prev_cart.name or self._default_cart_name,
            event.store,
            event.new_user,
            event.language or prev_cart.language or event.store.default_language,
            event.currency or prev_cart.currency,
        )
        await self.merge_with_cart(prev_cart)
        await self.save()

        await self._invalidate_cart_cache(prev_cart)
        if not prev_cart.is_transient():
            await self._cart_store.delete_carts([prev_cart.id])
            log.info("Deleted anonymous cart")

    # ==================== Persistence ====================

    async def save(self) -> Cart:
        """
        Evaluate and persist the bound cart, then rebind the stored copy.

        Returns:
            The cart as stored
        """
        cart = self._ensure_cart("save")
        await self._invalidate_cart_cache(cart)

        await self.evaluate_promotions()
        await self.evaluate_taxes()

        dto = to_cart_dto(cart)
        if cart.is_transient():
            dto = await self._cart_store.create_cart(dto)
            logger.info("Created cart", cart_id=dto.id, customer_id=cart.customer_id)
        else:
            await self._cart_store.update_cart(dto)
            logger.info("Updated cart", cart_id=dto.id)

        stored = await self._cart_store.get_cart_by_id(dto.id)
        if stored is None:
            raise IntegrationException("cart_store", f"Cart {dto.id} not found after save")

        saved_cart = to_shopping_cart(stored, cart.currency, cart.language)
        saved_cart.customer = cart.customer
        self._cart = saved_cart
        return saved_cart

    async def remove_cart(self) -> None:
        """Delete the bound cart from the cart store and unbind it."""
        cart = self._ensure_cart("remove_cart")
        await self._invalidate_cart_cache(cart)
        if not cart.is_transient():
            await self._cart_store.delete_carts([cart.id])
            logger.info("Removed cart", cart_id=cart.id)
        self._cart = None

    async def _invalidate_cart_cache(self, cart: Cart) -> None:
        if cart.customer_id is not None:
            await self._cache.invalidate(
                cart_cache_key(cart.store_id, cart.name, cart.customer_id, cart.currency), self._cart_region
            )
        if cart.id:
            await self._cache.invalidate(cart_id_cache_key(cart.id), self._cart_region)
