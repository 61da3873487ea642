"""
Domain Exceptions for Domain-Driven Design

These exceptions represent precondition failures and collaborator errors.
Cart validation problems are not exceptions: they are recorded as validation
errors on line items and shipments.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "CART_NOT_LOADED")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for invalid entity states, value object creation failures, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class CartNotLoadedException(DomainException):
    """Raised when a cart operation runs before a cart was loaded or created."""

    def __init__(self, operation: str | None = None):
        self.operation = operation
        details: dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        super().__init__("Cart not loaded.", "CART_NOT_LOADED", details)


class UnknownShipmentMethodException(DomainException):
    """Raised when a shipment references a method/option not currently available."""

    def __init__(self, method_code: str, option_name: str | None = None):
        self.method_code = method_code
        self.option_name = option_name
        super().__init__(
            f"Unknown shipment method: {method_code} with option: {option_name}",
            "UNKNOWN_SHIPMENT_METHOD",
            {"method_code": method_code, "option_name": option_name},
        )


class UnknownPaymentMethodException(DomainException):
    """Raised when a payment references a gateway code not currently available."""

    def __init__(self, method_code: str):
        self.method_code = method_code
        super().__init__(
            f"Unknown payment method {method_code}",
            "UNKNOWN_PAYMENT_METHOD",
            {"method_code": method_code},
        )


class IntegrationException(DomainException):
    """Raised when an external integration fails."""

    def __init__(self, service: str, message: str, original_error: Exception | None = None):
        self.service = service
        self.original_error = original_error
        details: dict[str, Any] = {"service": service}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(message, "INTEGRATION_ERROR", details)
