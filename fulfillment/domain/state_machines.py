"""State machine for the order aggregate.

Deterministic, strictly linear lifecycle. The enum values double as the
fixed vocabulary of the ``orders.status`` column.
"""

from enum import Enum

from fulfillment.domain.exceptions import InvalidStateTransitionError


class OrderStatus(str, Enum):
    """Order lifecycle states.

    State diagram:
        CREATED
          │
          │ pay
          ▼
        PAID
          │
          │ ship
          ▼
        SHIPPED
    """

    CREATED = "CREATED"
    PAID = "PAID"
    SHIPPED = "SHIPPED"

    @property
    def rank(self) -> int:
        """Position of this state in the lifecycle, starting at 0."""
        return _ORDER_LIFECYCLE.index(self)

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _ORDER_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["OrderStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return list(_ORDER_TRANSITIONS.get(self, set()))

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state.

        Returns:
            True if no further transitions are possible.
        """
        return len(_ORDER_TRANSITIONS.get(self, set())) == 0

    def is_paid(self) -> bool:
        """Check if the order has been paid (PAID or later)."""
        return self.rank >= OrderStatus.PAID.rank

    def is_shipped(self) -> bool:
        return self == OrderStatus.SHIPPED

    def is_editable(self) -> bool:
        """Check if the order's items may still be replaced."""
        return self == OrderStatus.CREATED


_ORDER_LIFECYCLE: tuple[OrderStatus, ...] = (
    OrderStatus.CREATED,
    OrderStatus.PAID,
    OrderStatus.SHIPPED,
)

# Order state transitions (defined outside enum to avoid Enum restrictions)
_ORDER_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.CREATED: {OrderStatus.PAID},
    OrderStatus.PAID: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: set(),  # Terminal state
}


def validate_order_transition(
    order_id: str,
    current_status: OrderStatus,
    target_status: OrderStatus,
) -> None:
    """Validate and raise if order state transition is invalid.

    Args:
        order_id: Order identifier for error message.
        current_status: Current order status.
        target_status: Target order status.

    Raises:
        InvalidStateTransitionError: If transition is not valid.
    """
    if not current_status.can_transition_to(target_status):
        raise InvalidStateTransitionError(
            entity_type="Order",
            entity_id=order_id,
            current_state=current_status.value,
            target_state=target_status.value,
            allowed_transitions=[s.value for s in current_status.allowed_transitions()],
        )
