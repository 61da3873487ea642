from storefront.domains.cart.domain.value_objects.validation_errors import (
    PriceError,
    QuantityError,
    UnavailableError,
    ValidationError,
)

__all__ = ["PriceError", "QuantityError", "UnavailableError", "ValidationError"]
