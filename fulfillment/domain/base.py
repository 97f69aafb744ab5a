"""Base classes for domain layer.

Provides foundational abstractions for entities, value objects,
aggregates, and domain events following DDD patterns.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID, uuid4


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# ============================================================================
# Value Object Base
# ============================================================================


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for value objects.

    Value objects are immutable and compared by their attributes,
    not by identity. They have no lifecycle and are interchangeable
    when their values are equal.

    Example:
        @dataclass(frozen=True)
        class Money(ValueObject):
            amount: Decimal
            currency: str
    """

    pass


# ============================================================================
# Entity Base
# ============================================================================


T = TypeVar("T")


class Entity(ABC, Generic[T]):
    """Base class for entities.

    Entities have identity that persists across state changes.
    Two entities are equal if they have the same identity,
    regardless of their other attributes. The identity is
    assigned once and exposed read-only.
    """

    def __init__(self, id: T) -> None:
        self._id = id

    @property
    def id(self) -> T:
        """Unique identifier for this entity."""
        return self._id

    def __eq__(self, other: object) -> bool:
        """Compare entities by identity.

        Args:
            other: Object to compare with.

        Returns:
            True if other is same type with same id.
        """
        if not isinstance(other, self.__class__):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)


# ============================================================================
# Aggregate Root Base
# ============================================================================


class AggregateRoot(Entity[T]):
    """Base class for aggregate roots.

    Aggregate roots are the entry point to a cluster of domain objects.
    They ensure consistency of the aggregate and record domain events
    that callers may collect after a state change.
    """

    def __init__(self, id: T, created_at: datetime) -> None:
        super().__init__(id)
        self._created_at = created_at
        self._events: list["DomainEvent"] = []

    @property
    def created_at(self) -> datetime:
        """Timestamp when the aggregate was created."""
        return self._created_at

    def _record_event(self, event: "DomainEvent") -> None:
        """Record a domain event.

        Args:
            event: Domain event to record.
        """
        self._events.append(event)

    def collect_events(self) -> list["DomainEvent"]:
        """Collect and clear recorded events.

        Returns:
            List of domain events that were recorded.
        """
        events = self._events.copy()
        self._events.clear()
        return events


# ============================================================================
# Domain Event Base
# ============================================================================


@dataclass(frozen=True)
class DomainEvent(ABC):
    """Base class for domain events.

    Domain events represent something significant that happened
    in the domain. They are immutable and contain all information
    about what happened.

    Attributes:
        event_id: Unique identifier for this event instance.
        event_type: String identifier for the event type (set by subclass).
        occurred_at: Timestamp when the event occurred.
        aggregate_id: ID of the aggregate that emitted this event.
        aggregate_type: Type name of the aggregate.
    """

    event_type: ClassVar[str]

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)
    aggregate_id: str = field(default="")
    aggregate_type: str = field(default="")

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event.
        """
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "payload": self._payload(),
        }

    @abstractmethod
    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload data.

        Returns:
            Dictionary with event-specific data.
        """
        pass
