"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They decouple the lifecycle operations from side effects such as
audit logging and notifications.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4


class DomainEvent(ABC):
    """
    Base class for all domain events.

    Subclasses set their own payload attributes and call
    ``super().__init__`` with the aggregate id.
    """

    def __init__(self, aggregate_id, occurred_at: Optional[datetime] = None):
        self.event_id = uuid4()
        self.occurred_at = occurred_at or datetime.now(timezone.utc)
        self.aggregate_id = str(aggregate_id)

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
        }


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
