"""Domain events for the order aggregate.

Events are recorded on the aggregate when its state changes and can be
collected by the caller after a successful save. They are kept in memory
only; nothing in this package stores or publishes them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from fulfillment.domain.base import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Event raised when an order is created."""

    event_type: ClassVar[str] = "order.created"

    order_id: str = ""
    customer_id: str = ""
    item_count: int = 0

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "order_id": self.order_id,
            "customer_id": self.customer_id,
            "item_count": self.item_count,
        }


@dataclass(frozen=True)
class OrderPaid(DomainEvent):
    """Event raised when an order is paid."""

    event_type: ClassVar[str] = "order.paid"

    order_id: str = ""
    paid_at: datetime | None = None

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "order_id": self.order_id,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
        }


@dataclass(frozen=True)
class OrderShipped(DomainEvent):
    """Event raised when an order is shipped."""

    event_type: ClassVar[str] = "order.shipped"

    order_id: str = ""
    shipped_at: datetime | None = None

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "order_id": self.order_id,
            "shipped_at": self.shipped_at.isoformat() if self.shipped_at else None,
        }


@dataclass(frozen=True)
class OrderItemsReplaced(DomainEvent):
    """Event raised when the item list of a CREATED order is replaced."""

    event_type: ClassVar[str] = "order.items_replaced"

    order_id: str = ""
    previous_item_count: int = 0
    item_count: int = 0

    def _payload(self) -> dict[str, Any]:
        """Get event-specific payload."""
        return {
            "order_id": self.order_id,
            "previous_item_count": self.previous_item_count,
            "item_count": self.item_count,
        }


EVENT_REGISTRY: dict[str, type[DomainEvent]] = {
    OrderCreated.event_type: OrderCreated,
    OrderPaid.event_type: OrderPaid,
    OrderShipped.event_type: OrderShipped,
    OrderItemsReplaced.event_type: OrderItemsReplaced,
}


def get_event_class(event_type: str) -> type[DomainEvent] | None:
    """Look up an event class by its ``event_type`` string."""
    return EVENT_REGISTRY.get(event_type)
