"""
Cart Store DTOs

Pydantic models mirroring the cart module's JSON contract (camelCase on the
wire, snake_case in Python).
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CartStoreModel(BaseModel):
    """Base model: camelCase aliases, populate by field name too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AddressDto(CartStoreModel):
    first_name: str | None = None
    last_name: str | None = None
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    region_name: str | None = None
    postal_code: str | None = None
    country_code: str | None = None
    email: str | None = None
    phone: str | None = None


class DiscountDto(CartStoreModel):
    promotion_id: str
    description: str | None = None
    coupon: str | None = None
    currency: str | None = None
    discount_amount: Decimal = Decimal("0")


class LineItemDto(CartStoreModel):
    id: str | None = None
    product_id: str
    sku: str | None = None
    name: str | None = None
    quantity: int = Field(default=1, ge=0)
    currency: str | None = None
    language_code: str | None = None
    list_price: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None
    image_url: str | None = None
    is_read_only: bool = False
    discounts: list[DiscountDto] = Field(default_factory=list)


class ShipmentDto(CartStoreModel):
    id: str | None = None
    shipment_method_code: str | None = None
    shipment_method_option: str | None = None
    currency: str | None = None
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None
    delivery_address: AddressDto | None = None
    discounts: list[DiscountDto] = Field(default_factory=list)


class PaymentDto(CartStoreModel):
    id: str | None = None
    payment_gateway_code: str | None = None
    currency: str | None = None
    amount: Decimal = Decimal("0")
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    tax_total: Decimal = Decimal("0")
    tax_percent_rate: Decimal = Decimal("0")
    tax_type: str | None = None
    billing_address: AddressDto | None = None
    discounts: list[DiscountDto] = Field(default_factory=list)


class ShoppingCartDto(CartStoreModel):
    id: str | None = None
    name: str | None = None
    store_id: str
    customer_id: str | None = None
    customer_name: str | None = None
    is_anonymous: bool = True
    currency: str
    language_code: str | None = None
    coupon: str | None = None
    comment: str | None = None
    items: list[LineItemDto] = Field(default_factory=list)
    shipments: list[ShipmentDto] = Field(default_factory=list)
    payments: list[PaymentDto] = Field(default_factory=list)
    discounts: list[DiscountDto] = Field(default_factory=list)
    discount_amount: Decimal = Decimal("0")
    # Totals are computed server side; sent for information only
    sub_total: Decimal = Decimal("0")
    discount_total: Decimal = Decimal("0")
    shipping_total: Decimal = Decimal("0")
    tax_total: Decimal = Decimal("0")
    total: Decimal = Decimal("0")


class ShippingMethodInfoDto(CartStoreModel):
    code: str
    name: str | None = None
    logo_url: str | None = None
    priority: int = 0
    tax_type: str | None = None


class ShippingRateDto(CartStoreModel):
    shipping_method: ShippingMethodInfoDto
    option_name: str | None = None
    option_description: str | None = None
    currency: str | None = None
    rate: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")


class PaymentMethodDto(CartStoreModel):
    code: str
    name: str | None = None
    description: str | None = None
    logo_url: str | None = None
    payment_method_type: str | None = None
    priority: int = 0
    is_available_for_partial_payments: bool = False
    currency: str | None = None
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    tax_type: str | None = None


class CartSearchCriteria(CartStoreModel):
    store_id: str
    customer_id: str | None = None
    name: str | None = None
    currency: str | None = None
    skip: int = Field(default=0, ge=0)
    take: int = Field(default=1, ge=1)


class CartSearchResultDto(CartStoreModel):
    total_count: int = 0
    results: list[ShoppingCartDto] = Field(default_factory=list)


__all__ = [
    "AddressDto",
    "CartSearchCriteria",
    "CartSearchResultDto",
    "CartStoreModel",
    "DiscountDto",
    "LineItemDto",
    "PaymentDto",
    "PaymentMethodDto",
    "ShipmentDto",
    "ShippingMethodInfoDto",
    "ShippingRateDto",
    "ShoppingCartDto",
]
