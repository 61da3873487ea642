"""
Base Domain Event Classes for Domain-Driven Design

Domain Events represent significant business occurrences that domain experts
care about. They are used to communicate between aggregates and bounded contexts.
"""

import logging
from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable, Coroutine
from uuid import UUID, uuid4

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Domain events are immutable records of something that happened
    in the domain. They capture the fact that something occurred.

    Example:
        ```python
        @dataclass(frozen=True)
        class UserLoginEvent(DomainEvent):
            prev_user: CustomerInfo | None = None
            new_user: CustomerInfo | None = None
        ```
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        """Get the event type name (class name)."""
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
        }
        for key, value in self.__dict__.items():
            if key in result:
                continue
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, UUID):
                result[key] = str(value)
            else:
                result[key] = value
        return result


# Type alias for event handlers
EventHandler = Callable[[Any], Coroutine[Any, Any, None]]


class DomainEventPublisher:
    """
    In-process domain event publisher.

    Handlers are registered on an instance (wired by the container), so there is
    no process-wide registry. Handlers run sequentially in subscription order and
    a failing handler stops the dispatch: the error reaches the publisher's caller.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to subscribe to
            handler: Async handler function
        """
        self._handlers.setdefault(event_type.__name__, []).append(handler)

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribers.

        Args:
            event: Event to publish
        """
        handlers = self._handlers.get(event.event_type, [])
        logger.debug(f"Publishing {event.event_type} to {len(handlers)} handler(s)")

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.event_type}: {e}")
                raise

    def clear_handlers(self) -> None:
        """Clear all event handlers (useful for testing)."""
        self._handlers.clear()
