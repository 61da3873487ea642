"""
Cart store DTO <-> domain converters.

Validation state and the attached catalog product are storefront-only and
are not persisted; everything else round-trips.
"""

from storefront.domains.cart.application.dto import (
    AddressDto,
    DiscountDto,
    LineItemDto,
    PaymentDto,
    PaymentMethodDto,
    ShipmentDto,
    ShippingRateDto,
    ShoppingCartDto,
)
from storefront.domains.cart.domain import (
    Cart,
    Coupon,
    LineItem,
    Payment,
    PaymentMethod,
    Shipment,
    ShippingMethod,
)
from storefront.domains.marketing.domain import Discount
from storefront.domains.shared.domain import Address

# ==================== DTO -> domain ====================


def to_address(dto: AddressDto | None) -> Address | None:
    if dto is None:
        return None
    return Address(**dto.model_dump())


def to_discount(dto: DiscountDto) -> Discount:
    return Discount(
        promotion_id=dto.promotion_id,
        amount=dto.discount_amount,
        description=dto.description,
        coupon=dto.coupon,
    )


def to_line_item(dto: LineItemDto, currency: str, language: str | None = None) -> LineItem:
    return LineItem(
        id=dto.id,
        product_id=dto.product_id,
        sku=dto.sku,
        name=dto.name or "",
        quantity=dto.quantity,
        currency=dto.currency or currency,
        language=dto.language_code or language,
        list_price=dto.list_price,
        sale_price=dto.sale_price,
        discount_amount=dto.discount_amount,
        discounts=[to_discount(d) for d in dto.discounts],
        tax_total=dto.tax_total,
        tax_percent_rate=dto.tax_percent_rate,
        tax_type=dto.tax_type,
        image_url=dto.image_url,
        is_read_only=dto.is_read_only,
    )


def to_shipment(dto: ShipmentDto, currency: str) -> Shipment:
    return Shipment(
        id=dto.id,
        shipment_method_code=dto.shipment_method_code,
        shipment_method_option=dto.shipment_method_option,
        currency=dto.currency or currency,
        price=dto.price,
        discount_amount=dto.discount_amount,
        discounts=[to_discount(d) for d in dto.discounts],
        tax_total=dto.tax_total,
        tax_percent_rate=dto.tax_percent_rate,
        tax_type=dto.tax_type,
        delivery_address=to_address(dto.delivery_address),
    )


def to_payment(dto: PaymentDto, currency: str) -> Payment:
    return Payment(
        id=dto.id,
        payment_gateway_code=dto.payment_gateway_code,
        currency=dto.currency or currency,
        amount=dto.amount,
        price=dto.price,
        discount_amount=dto.discount_amount,
        discounts=[to_discount(d) for d in dto.discounts],
        tax_total=dto.tax_total,
        tax_percent_rate=dto.tax_percent_rate,
        tax_type=dto.tax_type,
        billing_address=to_address(dto.billing_address),
    )


def to_shopping_cart(dto: ShoppingCartDto, currency: str | None = None, language: str | None = None) -> Cart:
    """
    Adapt a stored cart.

    Args:
        dto: Stored cart
        currency: Currency to use when the stored cart has none for a part
        language: Language to use when the stored cart has none
    """
    cart_currency = dto.currency or currency or "USD"
    cart_language = dto.language_code or language
    return Cart(
        id=dto.id,
        store_id=dto.store_id,
        name=dto.name or "",
        customer_id=dto.customer_id,
        customer_name=dto.customer_name,
        is_anonymous=dto.is_anonymous,
        language=cart_language,
        currency=cart_currency,
        items=[to_line_item(item, cart_currency, cart_language) for item in dto.items],
        shipments=[to_shipment(shipment, cart_currency) for shipment in dto.shipments],
        payments=[to_payment(payment, cart_currency) for payment in dto.payments],
        coupon=Coupon(code=dto.coupon) if dto.coupon else None,
        discounts=[to_discount(d) for d in dto.discounts],
        discount_amount=dto.discount_amount,
        comment=dto.comment,
    )


def to_shipping_method(dto: ShippingRateDto, currency: str) -> ShippingMethod:
    return ShippingMethod(
        shipment_method_code=dto.shipping_method.code,
        option_name=dto.option_name,
        option_description=dto.option_description,
        name=dto.shipping_method.name,
        logo_url=dto.shipping_method.logo_url,
        priority=dto.shipping_method.priority,
        currency=dto.currency or currency,
        price=dto.rate,
        discount_amount=dto.discount_amount,
        tax_type=dto.shipping_method.tax_type,
    )


def to_payment_method(dto: PaymentMethodDto, currency: str) -> PaymentMethod:
    return PaymentMethod(
        code=dto.code,
        name=dto.name,
        description=dto.description,
        logo_url=dto.logo_url,
        payment_method_type=dto.payment_method_type,
        priority=dto.priority,
        is_available_for_partial_payments=dto.is_available_for_partial_payments,
        currency=dto.currency or currency,
        price=dto.price,
        discount_amount=dto.discount_amount,
        tax_type=dto.tax_type,
    )


# ==================== domain -> DTO ====================


def to_address_dto(address: Address | None) -> AddressDto | None:
    if address is None:
        return None
    return AddressDto(
        first_name=address.first_name,
        last_name=address.last_name,
        line1=address.line1,
        line2=address.line2,
        city=address.city,
        region_name=address.region_name,
        postal_code=address.postal_code,
        country_code=address.country_code,
        email=address.email,
        phone=address.phone,
    )


def to_discount_dto(discount: Discount, currency: str) -> DiscountDto:
    return DiscountDto(
        promotion_id=discount.promotion_id,
        description=discount.description,
        coupon=discount.coupon,
        currency=currency,
        discount_amount=discount.amount,
    )


def to_line_item_dto(item: LineItem) -> LineItemDto:
    return LineItemDto(
        id=item.id,
        product_id=item.product_id,
        sku=item.sku,
        name=item.name,
        quantity=item.quantity,
        currency=item.currency,
        language_code=item.language,
        list_price=item.list_price,
        sale_price=item.sale_price,
        discount_amount=item.discount_amount,
        tax_total=item.tax_total,
        tax_percent_rate=item.tax_percent_rate,
        tax_type=item.tax_type,
        image_url=item.image_url,
        is_read_only=item.is_read_only,
        discounts=[to_discount_dto(d, item.currency) for d in item.discounts],
    )


def to_shipment_dto(shipment: Shipment) -> ShipmentDto:
    return ShipmentDto(
        id=shipment.id,
        shipment_method_code=shipment.shipment_method_code,
        shipment_method_option=shipment.shipment_method_option,
        currency=shipment.currency,
        price=shipment.price,
        discount_amount=shipment.discount_amount,
        tax_total=shipment.tax_total,
        tax_percent_rate=shipment.tax_percent_rate,
        tax_type=shipment.tax_type,
        delivery_address=to_address_dto(shipment.delivery_address),
        discounts=[to_discount_dto(d, shipment.currency) for d in shipment.discounts],
    )


def to_payment_dto(payment: Payment) -> PaymentDto:
    return PaymentDto(
        id=payment.id,
        payment_gateway_code=payment.payment_gateway_code,
        currency=payment.currency,
        amount=payment.amount,
        price=payment.price,
        discount_amount=payment.discount_amount,
        tax_total=payment.tax_total,
        tax_percent_rate=payment.tax_percent_rate,
        tax_type=payment.tax_type,
        billing_address=to_address_dto(payment.billing_address),
        discounts=[to_discount_dto(d, payment.currency) for d in payment.discounts],
    )


def to_cart_dto(cart: Cart) -> ShoppingCartDto:
    return ShoppingCartDto(
        id=cart.id,
        name=cart.name,
        store_id=cart.store_id,
        customer_id=cart.customer_id,
        customer_name=cart.customer_name,
        is_anonymous=cart.is_anonymous,
        currency=cart.currency,
        language_code=cart.language,
        coupon=cart.coupon.code if cart.coupon else None,
        comment=cart.comment,
        items=[to_line_item_dto(item) for item in cart.items],
        shipments=[to_shipment_dto(shipment) for shipment in cart.shipments],
        payments=[to_payment_dto(payment) for payment in cart.payments],
        discounts=[to_discount_dto(d, cart.currency) for d in cart.discounts],
        discount_amount=cart.discount_amount,
        sub_total=cart.sub_total,
        discount_total=cart.discount_total,
        shipping_total=cart.shipping_total,
        tax_total=cart.tax_total,
        total=cart.total,
    )
