"""
Unit tests for CartBuilder cart mutations.

Tests:
- Merge-add and quantity changes (repricing, removal, read-only lines)
- Coupons
- Shipment and payment resolution against available methods
- Method listings with promotions and taxes
- Merging carts and filling from quote requests
"""

from decimal import Decimal

import pytest

from storefront.core.domain import UnknownPaymentMethodException, UnknownShipmentMethodException
from storefront.domains.cart.domain import (
    Cart,
    Coupon,
    LineItem,
    Payment,
    QuoteItem,
    QuoteRequest,
    QuoteShipmentMethod,
    Shipment,
)
from storefront.domains.catalog.domain.entities import TierPrice
from storefront.domains.catalog.domain.value_objects import ItemResponseGroup
from storefront.domains.marketing.domain import AmountType, PromotionReward, RewardType
from storefront.domains.shared.domain import Address


async def load(builder, store, customer) -> Cart:
    return await builder.load_or_create(None, store, customer, "en-US", "USD")


class TestAddItem:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_adding_same_product_merges_quantities(
        self, cart_builder, catalog_service, store, anonymous_customer
    ):
        # Arrange
        await load(cart_builder, store, anonymous_customer)

        # Act
        await cart_builder.add_item(catalog_service.products["p-3"], 2)
        await cart_builder.add_item(catalog_service.products["p-3"], 3)

        # Assert
        assert len(cart_builder.cart.items) == 1
        assert cart_builder.cart.items[0].quantity == 5

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_merging_zero_quantity_adds_one(self, cart_builder, catalog_service, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        await cart_builder.add_item(catalog_service.products["p-3"], 2)
        await cart_builder.add_item(catalog_service.products["p-3"], 0)

        assert cart_builder.cart.items[0].quantity == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_merged_quantity_reaches_next_tier(self, cart_builder, catalog_service, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        await cart_builder.add_item(catalog_service.products["p-2"], 2)
        assert cart_builder.cart.items[0].sale_price == Decimal("50.00")

        await cart_builder.add_item(catalog_service.products["p-2"], 3)

        item = cart_builder.cart.items[0]
        assert item.quantity == 5
        assert item.sale_price == Decimal("45.00")
        assert item.list_price == Decimal("50.00")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_list_price_never_below_sale_price(
        self, cart_builder, catalog_service, product_factory, store, anonymous_customer
    ):
        # Arrange
        catalog_service.add(product_factory("p-4", list_price="10.00", tier_prices=[("12.00", 1)]))
        await load(cart_builder, store, anonymous_customer)

        # Act
        await cart_builder.add_item(catalog_service.products["p-4"], 1)
        await cart_builder.change_item_quantity_at(0, 3)

        # Assert
        for item in cart_builder.cart.items:
            assert item.list_price >= item.sale_price


class TestChangeQuantity:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_zero_quantity_removes_item(self, cart_builder, catalog_service, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)
        await cart_builder.add_item(catalog_service.products["p-1"], 2)

        await cart_builder.change_item_quantity_at(0, 0)

        assert cart_builder.cart.items == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_change_by_line_item_id(self, cart_builder, catalog_service, store, anonymous_customer):
        # Arrange
        await load(cart_builder, store, anonymous_customer)
        await cart_builder.add_item(catalog_service.products["p-1"], 1)
        await cart_builder.add_item(catalog_service.products["p-3"], 1)
        cart = await cart_builder.save()
        first_id = cart.items[0].id

        # Act
        await cart_builder.change_item_quantity(first_id, 4)
        await cart_builder.change_item_quantity(cart.items[1].id, 0)

        # Assert
        assert [item.id for item in cart_builder.cart.items] == [first_id]
        assert cart_builder.cart.items[0].quantity == 4

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_line_item_is_ignored(self, cart_builder, catalog_service, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)
        await cart_builder.add_item(catalog_service.products["p-1"], 1)

        await cart_builder.change_item_quantity("missing", 0)
        await cart_builder.change_item_quantity_at(5, 0)

        assert len(cart_builder.cart.items) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_positional_changes_skip_non_positive(
        self, cart_builder, catalog_service, store, anonymous_customer
    ):
        await load(cart_builder, store, anonymous_customer)
        await cart_builder.add_item(catalog_service.products["p-1"], 1)
        await cart_builder.add_item(catalog_service.products["p-3"], 1)

        await cart_builder.change_items_quantities([3, 0, 7])

        assert [item.quantity for item in cart_builder.cart.items] == [3, 1]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_read_only_items_are_not_changed(self, cart_builder, store, anonymous_customer):
        # Arrange
        await load(cart_builder, store, anonymous_customer)
        cart_builder.cart.items.append(
            LineItem(
                product_id="p-1",
                quantity=4,
                list_price=Decimal("25.00"),
                sale_price=Decimal("15.00"),
                is_read_only=True,
            )
        )

        # Act
        await cart_builder.change_item_quantity_at(0, 10)
        await cart_builder.change_items_quantities([1])
        await cart_builder.change_item_quantity_at(0, 0)

        # Assert
        item = cart_builder.cart.items[0]
        assert item.quantity == 4
        assert item.sale_price == Decimal("15.00")


class TestRemoveAndClear:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_remove_item_and_clear(self, cart_builder, catalog_service, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)
        await cart_builder.add_item(catalog_service.products["p-1"], 1)
        await cart_builder.add_item(catalog_service.products["p-3"], 1)
        cart = await cart_builder.save()

        await cart_builder.remove_item(cart.items[0].id)
        assert [item.product_id for item in cart_builder.cart.items] == ["p-3"]

        await cart_builder.clear()
        assert cart_builder.cart.items == []


class TestCoupon:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_add_and_remove_coupon(self, cart_builder, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        await cart_builder.add_or_update_coupon("SAVE10")
        assert cart_builder.cart.coupon == Coupon(code="SAVE10")

        await cart_builder.remove_coupon()
        assert cart_builder.cart.coupon is None


class TestShipments:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_shipment_takes_price_from_matching_method(self, cart_builder, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        await cart_builder.add_or_update_shipment(
            Shipment(shipment_method_code="fedex", shipment_method_option="ground")
        )

        shipment = cart_builder.cart.shipments[0]
        assert shipment.price == Decimal("10.00")
        assert shipment.currency == "USD"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_method_leaves_cart_unchanged(self, cart_builder, store, anonymous_customer):
        # Arrange
        await load(cart_builder, store, anonymous_customer)

        # Act
        with pytest.raises(UnknownShipmentMethodException) as exc_info:
            await cart_builder.add_or_update_shipment(
                Shipment(shipment_method_code="UPS", shipment_method_option="Ground")
            )

        # Assert
        assert exc_info.value.code == "UNKNOWN_SHIPMENT_METHOD"
        assert cart_builder.cart.shipments == []

        await cart_builder.add_or_update_shipment(
            Shipment(shipment_method_code="FedEx", shipment_method_option="Ground")
        )
        assert len(cart_builder.cart.shipments) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_option_is_rejected(self, cart_builder, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        with pytest.raises(UnknownShipmentMethodException):
            await cart_builder.add_or_update_shipment(
                Shipment(shipment_method_code="FedEx", shipment_method_option="Overnight")
            )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_shipment_with_same_id_is_replaced(
        self, cart_builder, catalog_service, store, anonymous_customer
    ):
        # Arrange
        await load(cart_builder, store, anonymous_customer)
        await cart_builder.add_item(catalog_service.products["p-1"], 1)
        await cart_builder.add_or_update_shipment(
            Shipment(shipment_method_code="FedEx", shipment_method_option="Ground")
        )
        cart = await cart_builder.save()
        shipment_id = cart.shipments[0].id

        # Act
        await cart_builder.add_or_update_shipment(
            Shipment(id=shipment_id, shipment_method_code="FedEx", shipment_method_option="Express")
        )

        # Assert
        assert len(cart_builder.cart.shipments) == 1
        assert cart_builder.cart.shipments[0].price == Decimal("25.00")

        await cart_builder.remove_shipment(shipment_id)
        assert cart_builder.cart.shipments == []


class TestPayments:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_payment_takes_fee_from_method(self, cart_builder, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        await cart_builder.add_or_update_payment(Payment(payment_gateway_code="paypal", amount=Decimal("50.00")))

        payment = cart_builder.cart.payments[0]
        assert payment.price == Decimal("1.50")
        assert payment.amount == Decimal("50.00")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_payment_method(self, cart_builder, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        with pytest.raises(UnknownPaymentMethodException) as exc_info:
            await cart_builder.add_or_update_payment(Payment(payment_gateway_code="Bitcoin"))

        assert exc_info.value.code == "UNKNOWN_PAYMENT_METHOD"
        assert cart_builder.cart.payments == []


class TestMethodListings:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_shipping_methods_are_discounted_then_taxed(
        self, cart_builder, store, anonymous_customer, marketing_api, tax_api
    ):
        # Arrange
        await load(cart_builder, store, anonymous_customer)
        marketing_api.rewards = [
            PromotionReward(
                promotion_id="ship-5", reward_type=RewardType.SHIPMENT, amount=Decimal("5"), shipping_method="FedEx"
            )
        ]

        # Act
        methods = await cart_builder.list_shipping_methods()

        # Assert
        assert [method.option_name for method in methods] == ["Ground", "Express"]
        assert [method.discount_amount for method in methods] == [Decimal("5"), Decimal("5")]
        assert [method.tax_total for method in methods] == [Decimal("0.50"), Decimal("2.00")]
        assert [line.id for line in tax_api.contexts[-1].lines] == ["FedEx:Ground", "FedEx:Express"]
        assert cart_builder.cart.shipments == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_payment_methods_sorted_by_priority(self, cart_builder, cart_store, store, anonymous_customer):
        await load(cart_builder, store, anonymous_customer)

        methods = await cart_builder.list_payment_methods()

        assert [method.code for method in methods] == ["CreditCard", "PayPal"]
        assert methods[1].tax_total == Decimal("0.15")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_methods_skips_evaluation(self, cart_builder, cart_store, store, anonymous_customer, tax_api):
        await load(cart_builder, store, anonymous_customer)
        cart_store.set_shipping_rates([])

        assert await cart_builder.list_shipping_methods() == []
        assert tax_api.contexts == []


class TestMergeWithCart:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_merge_combines_items_and_takes_other_parts(
        self, cart_builder, catalog_service, store, registered_customer
    ):
        # Arrange
        await load(cart_builder, store, registered_customer)
        await cart_builder.add_item(catalog_service.products["p-3"], 1)
        other = Cart(
            id="anon-cart",
            store_id="electronics",
            customer_id="anon-1",
            items=[
                LineItem(id="li-1", product_id="p-1", quantity=1, list_price=Decimal("20"), sale_price=Decimal("18")),
                LineItem(id="li-2", product_id="p-3", quantity=2, list_price=Decimal("5"), sale_price=Decimal("5")),
            ],
            shipments=[Shipment(id="sh-1", shipment_method_code="FedEx", shipment_method_option="Ground")],
            payments=[Payment(id="pay-1", payment_gateway_code="PayPal")],
            coupon=Coupon(code="SAVE10"),
        )

        # Act
        await cart_builder.merge_with_cart(other)

        # Assert
        cart = cart_builder.cart
        quantities = {item.product_id: item.quantity for item in cart.items}
        assert quantities == {"p-3": 3, "p-1": 1}
        assert cart.find_item_by_product("p-1").id is None
        assert cart.coupon == Coupon(code="SAVE10")
        assert cart.coupon is not other.coupon
        assert [shipment.id for shipment in cart.shipments] == [None]
        assert [payment.id for payment in cart.payments] == [None]
        assert other.items[0].id == "li-1"
        assert other.shipments[0].id == "sh-1"


class TestFillFromQuoteRequest:
    @pytest.fixture
    def quote_request(self) -> QuoteRequest:
        return QuoteRequest(
            id="q-1",
            items=[
                QuoteItem(
                    product_id="p-1",
                    list_price=Decimal("25.00"),
                    selected_tier_price=TierPrice(Decimal("15.00"), 4),
                )
            ],
            request_shipping_quote=True,
            shipping_address=Address(city="Austin", country_code="US"),
            shipment_method=QuoteShipmentMethod(
                shipment_method_code="FedEx", option_name="Ground", price=Decimal("12.00")
            ),
            grand_total_incl_tax=Decimal("82.00"),
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_items_get_quote_prices_and_become_read_only(
        self, cart_builder, catalog_service, store, registered_customer, quote_request
    ):
        # Arrange
        await load(cart_builder, store, registered_customer)
        await cart_builder.add_item(catalog_service.products["p-3"], 1)

        # Act
        await cart_builder.fill_from_quote_request(quote_request)

        # Assert
        assert catalog_service.calls == [(["p-1"], ItemResponseGroup.ITEM_LARGE)]
        item = cart_builder.cart.items[0]
        assert len(cart_builder.cart.items) == 1
        assert item.is_read_only
        assert item.quantity == 4
        assert item.list_price == Decimal("25.00")
        assert item.sale_price == Decimal("15.00")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_adds_quoted_shipment_and_payment(self, cart_builder, store, registered_customer, quote_request):
        await load(cart_builder, store, registered_customer)

        await cart_builder.fill_from_quote_request(quote_request)

        shipment = cart_builder.cart.shipments[0]
        assert (shipment.shipment_method_code, shipment.shipment_method_option) == ("FedEx", "Ground")
        assert shipment.delivery_address.city == "Austin"
        payment = cart_builder.cart.payments[0]
        assert payment.amount == Decimal("82.00")
        assert payment.payment_gateway_code is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_quote_items_ignore_promotions_and_quantity_changes(
        self, cart_builder, store, registered_customer, quote_request, marketing_api
    ):
        # Arrange
        await load(cart_builder, store, registered_customer)
        await cart_builder.fill_from_quote_request(quote_request)
        marketing_api.rewards = [
            PromotionReward(
                promotion_id="p1-10",
                reward_type=RewardType.CATALOG_ITEM_AMOUNT,
                amount=Decimal("10"),
                amount_type=AmountType.RELATIVE,
                product_id="p-1",
            )
        ]

        # Act
        await cart_builder.evaluate_promotions()
        await cart_builder.change_item_quantity_at(0, 10)

        # Assert
        item = cart_builder.cart.items[0]
        assert item.discount_amount == Decimal("0")
        assert item.quantity == 4
        assert item.extended_price == Decimal("60.00")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_quote_list_price_raised_to_tier_price(self, cart_builder, store, registered_customer):
        # Arrange
        await load(cart_builder, store, registered_customer)
        quote_request = QuoteRequest(
            id="q-2",
            items=[
                QuoteItem(
                    product_id="p-3",
                    list_price=Decimal("3.00"),
                    selected_tier_price=TierPrice(Decimal("4.00"), 2),
                )
            ],
        )

        # Act
        await cart_builder.fill_from_quote_request(quote_request)

        # Assert
        item = cart_builder.cart.items[0]
        assert item.sale_price == Decimal("4.00")
        assert item.list_price == Decimal("4.00")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_quote_payment_replaces_existing_payments(
        self, cart_builder, store, registered_customer, quote_request
    ):
        # Arrange
        await load(cart_builder, store, registered_customer)
        await cart_builder.add_or_update_payment(Payment(payment_gateway_code="CreditCard"))

        # Act
        await cart_builder.fill_from_quote_request(quote_request)

        # Assert
        payments = cart_builder.cart.payments
        assert len(payments) == 1
        assert payments[0].payment_gateway_code is None
        assert payments[0].amount == Decimal("82.00")

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("option_name", ["Overnight", None])
    async def test_quoted_shipment_kept_as_quoted(
        self, option_name, cart_builder, store, registered_customer, quote_request
    ):
        # Arrange
        await load(cart_builder, store, registered_customer)
        await cart_builder.add_or_update_shipment(
            Shipment(shipment_method_code="FedEx", shipment_method_option="Express")
        )
        quote_request.shipment_method = QuoteShipmentMethod(
            shipment_method_code="fedex", option_name=option_name, price=Decimal("12.00")
        )

        # Act
        await cart_builder.fill_from_quote_request(quote_request)

        # Assert
        assert len(cart_builder.cart.shipments) == 1
        shipment = cart_builder.cart.shipments[0]
        assert shipment.shipment_method_code == "fedex"
        assert shipment.shipment_method_option == option_name
        assert shipment.price == Decimal("12.00")
        assert shipment.delivery_address.city == "Austin"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_quoted_shipment_method_no_longer_offered(
        self, cart_builder, store, registered_customer, quote_request
    ):
        await load(cart_builder, store, registered_customer)
        quote_request.shipment_method = QuoteShipmentMethod(shipment_method_code="UPS", price=Decimal("9.00"))

        await cart_builder.fill_from_quote_request(quote_request)

        shipment = cart_builder.cart.shipments[0]
        assert shipment.shipment_method_code is None
        assert shipment.price == Decimal("0")
        assert shipment.delivery_address.city == "Austin"
