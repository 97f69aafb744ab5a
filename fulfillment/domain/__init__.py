"""Domain layer - Order aggregate, value objects, state machine, repository port.

This module exports the core domain building blocks following DDD patterns:

- **Entities**: The Order aggregate root and its OrderItem line items
- **Value Objects**: Immutable objects compared by value (Money, Address, OrderId)
- **State Machines**: The linear CREATED -> PAID -> SHIPPED order lifecycle
- **Domain Events**: Recorded on the aggregate when its state changes
- **Repositories**: The abstract persistence port for orders
- **Exceptions**: Domain-specific errors and invariant violations

Example usage:
    from fulfillment.domain import Address, Money, Order, OrderItem

    order = Order.create(
        customer_id="CUST001",
        items=[OrderItem.of("PROD001", "Laptop", Money.usd("999.99"), 1)],
        shipping_address=Address.of("123 Main St", "Springfield", "IL", "62701", "US"),
    )
    order.pay()
    print(order.total)  # $999.99 USD
"""

# Base classes
from fulfillment.domain.base import AggregateRoot, DomainEvent, Entity, ValueObject

# Entities
from fulfillment.domain.entities import Order, OrderItem

# Domain Events
from fulfillment.domain.events import (
    EVENT_REGISTRY,
    OrderCreated,
    OrderItemsReplaced,
    OrderPaid,
    OrderShipped,
    get_event_class,
)

# Exceptions
from fulfillment.domain.exceptions import (
    CurrencyMismatchError,
    DomainError,
    InvalidQuantityError,
    InvalidStateTransitionError,
    MoneyError,
    NegativeMoneyError,
    OrderError,
    OrderNotEditableError,
    OrderNotFoundError,
    PersistenceError,
    ValidationError,
)

# Repository port
from fulfillment.domain.repositories import OrderRepository

# State Machines
from fulfillment.domain.state_machines import OrderStatus, validate_order_transition

# Value Objects
from fulfillment.domain.value_objects import Address, Money, OrderId

__all__ = [
    # Base classes
    "AggregateRoot",
    "DomainEvent",
    "Entity",
    "ValueObject",
    # Entities
    "Order",
    "OrderItem",
    # Value Objects
    "Address",
    "Money",
    "OrderId",
    # State Machines
    "OrderStatus",
    "validate_order_transition",
    # Repository port
    "OrderRepository",
    # Domain Events
    "OrderCreated",
    "OrderPaid",
    "OrderShipped",
    "OrderItemsReplaced",
    "EVENT_REGISTRY",
    "get_event_class",
    # Exceptions
    "DomainError",
    "ValidationError",
    "InvalidQuantityError",
    "InvalidStateTransitionError",
    "OrderError",
    "OrderNotFoundError",
    "OrderNotEditableError",
    "MoneyError",
    "CurrencyMismatchError",
    "NegativeMoneyError",
    "PersistenceError",
]
