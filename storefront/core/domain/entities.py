"""
Base Entity Classes for Domain-Driven Design

Entities are domain objects with identity and lifecycle.
They maintain their identity regardless of their attributes.

In the storefront the identity is assigned by a remote service (cart store,
catalog), so an entity without an id is *transient*: it exists only in memory
until the owning service persists it.
"""

from abc import ABC
from dataclasses import dataclass, field
from typing import Generic, TypeVar
from uuid import uuid4

# Type variable for entity ID (int, str, UUID, etc.)
TId = TypeVar("TId")


@dataclass(eq=False)
class Entity(ABC, Generic[TId]):
    """
    Base class for all domain entities.

    Type Parameters:
        TId: Type of entity identifier (int, str, UUID)

    Example:
        ```python
        @dataclass(eq=False)
        class Shipment(Entity[str]):
            shipment_method_code: str | None = None

        shipment = Shipment()
        shipment.is_transient()  # True until the cart store assigns an id
        ```
    """

    id: TId | None = field(default=None)

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID."""
        if self is other:
            return True
        if not isinstance(other, Entity) or type(self) is not type(other):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id) if self.id is not None else id(self)

    def is_transient(self) -> bool:
        """Check if entity has not been assigned a durable identity yet."""
        return self.id is None or self.id == ""


@dataclass(eq=False)
class AggregateRoot(Entity[TId], Generic[TId]):
    """
    Base class for aggregate roots.

    An aggregate root is the entry point to an aggregate.
    It controls access to all members of the aggregate
    and ensures invariants are maintained.
    """


def generate_uuid_str() -> str:
    """Generate a new UUID as string."""
    return str(uuid4())
