"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Events: Domain events for communication
- Exceptions: Domain-specific error handling
"""

from storefront.core.domain.entities import AggregateRoot, Entity, generate_uuid_str
from storefront.core.domain.events import DomainEvent, DomainEventPublisher
from storefront.core.domain.exceptions import (
    CartNotLoadedException,
    DomainException,
    IntegrationException,
    UnknownPaymentMethodException,
    UnknownShipmentMethodException,
    ValidationException,
)
from storefront.core.domain.value_objects import ValueObject, round_money, to_decimal

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "generate_uuid_str",
    # Value Objects
    "ValueObject",
    "round_money",
    "to_decimal",
    # Events
    "DomainEvent",
    "DomainEventPublisher",
    # Exceptions
    "DomainException",
    "ValidationException",
    "CartNotLoadedException",
    "UnknownShipmentMethodException",
    "UnknownPaymentMethodException",
    "IntegrationException",
]
