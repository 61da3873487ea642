"""
Unit tests for HttpCartStore using httpx.MockTransport.
"""

import json
from decimal import Decimal

import httpx
import pytest

from storefront.core.domain import IntegrationException
from storefront.domains.cart.application.dto import CartSearchCriteria, LineItemDto, ShoppingCartDto
from storefront.domains.cart.infrastructure import HttpCartStore

STORED_CART = {
    "id": "c-1",
    "storeId": "electronics",
    "name": "default",
    "customerId": "user-1",
    "isAnonymous": False,
    "currency": "USD",
    "items": [{"id": "li-1", "productId": "p-1", "quantity": 2, "listPrice": "20.00", "salePrice": "18.00"}],
}


def make_store(handler, api_key: str | None = None) -> HttpCartStore:
    return HttpCartStore("https://carts.example.com/", api_key=api_key, transport=httpx.MockTransport(handler))


class TestCarts:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_search_sends_camel_case_criteria(self):
        # Arrange
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"totalCount": 1, "results": [STORED_CART]})

        # Act
        async with make_store(handler, api_key="secret") as store:
            result = await store.search_carts(
                CartSearchCriteria(store_id="electronics", customer_id="user-1", name="default", currency="USD")
            )

        # Assert
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/carts/search"
        assert request.headers["api_key"] == "secret"
        body = json.loads(request.content)
        assert body["storeId"] == "electronics"
        assert body["customerId"] == "user-1"
        assert result.total_count == 1
        item = result.results[0].items[0]
        assert item.product_id == "p-1"
        assert item.sale_price == Decimal("18.00")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_get_cart_by_id(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/carts/c-1"
            return httpx.Response(200, json=STORED_CART)

        async with make_store(handler) as store:
            cart = await store.get_cart_by_id("c-1")

        assert cart.id == "c-1"
        assert cart.is_anonymous is False

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [204, 404])
    async def test_missing_cart_returns_none(self, status_code):
        async with make_store(lambda request: httpx.Response(status_code)) as store:
            assert await store.get_cart_by_id("missing") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_create_posts_cart_and_parses_result(self):
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            bodies.append(body)
            return httpx.Response(201, json={**body, "id": "c-9"})

        dto = ShoppingCartDto(
            store_id="electronics",
            currency="USD",
            items=[LineItemDto(product_id="p-1", quantity=1, sale_price=Decimal("18.00"))],
        )
        async with make_store(handler) as store:
            created = await store.create_cart(dto)

        assert bodies[0]["items"][0]["productId"] == "p-1"
        assert bodies[0]["items"][0]["salePrice"] == "18.00"
        assert created.id == "c-9"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_update_uses_put(self):
        methods: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            return httpx.Response(204)

        async with make_store(handler) as store:
            await store.update_cart(ShoppingCartDto(id="c-1", store_id="electronics", currency="USD"))

        assert methods == ["PUT"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_delete_sends_ids_as_query(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        async with make_store(handler) as store:
            await store.delete_carts(["c-1", "c-2"])
            await store.delete_carts([])

        assert len(requests) == 1
        assert requests[0].method == "DELETE"
        assert requests[0].url.params.get_list("ids") == ["c-1", "c-2"]


class TestAvailableMethods:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_shipping_rates_for_transient_cart(self):
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(
                200,
                json=[{"shippingMethod": {"code": "FedEx", "priority": 1}, "optionName": "Ground", "rate": 10}],
            )

        async with make_store(handler) as store:
            rates = await store.get_available_shipping_rates(None)

        assert paths == ["/api/carts/transient/availableShippingRates"]
        assert rates[0].shipping_method.code == "FedEx"
        assert rates[0].rate == Decimal("10")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_payment_methods(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/carts/c-1/availablePaymentMethods"
            return httpx.Response(200, json=[{"code": "PayPal", "price": "1.50"}])

        async with make_store(handler) as store:
            methods = await store.get_available_payment_methods("c-1")

        assert [method.code for method in methods] == ["PayPal"]
        assert methods[0].price == Decimal("1.50")


class TestErrors:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_http_error_is_wrapped(self):
        async with make_store(lambda request: httpx.Response(500, json={"message": "boom"})) as store:
            with pytest.raises(IntegrationException) as exc_info:
                await store.create_cart(ShoppingCartDto(store_id="electronics", currency="USD"))

        error = exc_info.value
        assert error.code == "INTEGRATION_ERROR"
        assert error.details["service"] == "cart_module"
        assert isinstance(error.original_error, httpx.HTTPStatusError)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_connection_error_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_store(handler) as store:
            with pytest.raises(IntegrationException):
                await store.search_carts(CartSearchCriteria(store_id="electronics"))
            with pytest.raises(IntegrationException):
                await store.get_cart_by_id("c-1")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with make_store(handler) as store:
            with pytest.raises(IntegrationException) as exc_info:
                await store.get_available_payment_methods("c-1")

        assert "timed out" in exc_info.value.message

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unexpected_payload_is_wrapped(self):
        async with make_store(lambda request: httpx.Response(200, json={"results": [{"id": "c-1"}]})) as store:
            with pytest.raises(IntegrationException):
                await store.search_carts(CartSearchCriteria(store_id="electronics"))

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_server_error_on_get(self):
        async with make_store(lambda request: httpx.Response(503, text="unavailable")) as store:
            with pytest.raises(IntegrationException):
                await store.get_cart_by_id("c-1")
