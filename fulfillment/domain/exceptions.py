"""Domain exceptions.

All errors raised by the order aggregate, its value objects and the
repository port. Validation and state machine errors represent
business rule violations; ``PersistenceError`` wraps failures of the
backing store.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(DomainError, ValueError):
    """Raised when a required field is missing or malformed at construction."""

    def __init__(self, field: str, reason: str, value: Any = None) -> None:
        """Initialize validation error.

        Args:
            field: Name of the offending field.
            reason: Explanation of why the value was rejected.
            value: The rejected value, if useful for diagnostics.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason, "value": value},
        )
        self.field = field


class InvalidQuantityError(ValidationError):
    """Raised when an invalid quantity is provided."""

    def __init__(self, quantity: Any, reason: str = "Quantity must be a positive integer") -> None:
        super().__init__("quantity", reason, value=quantity)


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid state transition is attempted.

    This error indicates that the requested operation cannot be performed
    in the current state of the entity.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "Order").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )
        self.current_state = current_state
        self.target_state = target_state


# ============================================================================
# Order Errors
# ============================================================================


class OrderError(DomainError):
    """Base class for order-related errors."""

    pass


class OrderNotFoundError(OrderError):
    """Raised when an order lookup by id finds nothing."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            f"Order {order_id} not found",
            details={"order_id": order_id},
        )


class OrderNotEditableError(OrderError):
    """Raised when trying to change the items of an order past CREATED."""

    def __init__(self, order_id: str, current_status: str) -> None:
        """Initialize order not editable error.

        Args:
            order_id: ID of the order.
            current_status: Current status of the order.
        """
        super().__init__(
            f"Order {order_id} is not editable in status '{current_status}'",
            details={"order_id": order_id, "current_status": current_status},
        )


# ============================================================================
# Money Errors
# ============================================================================


class MoneyError(DomainError):
    """Base class for money-related errors."""

    pass


class CurrencyMismatchError(MoneyError):
    """Raised when attempting to combine money with different currencies."""

    def __init__(self, currency1: str, currency2: str) -> None:
        """Initialize currency mismatch error.

        Args:
            currency1: First currency code.
            currency2: Second currency code.
        """
        super().__init__(
            f"Cannot combine money with different currencies: {currency1} and {currency2}",
            details={"currency1": currency1, "currency2": currency2},
        )


class NegativeMoneyError(MoneyError):
    """Raised when attempting to create money with negative amount."""

    def __init__(self, amount: Any) -> None:
        super().__init__(
            f"Money amount cannot be negative: {amount}",
            details={"amount": str(amount)},
        )


# ============================================================================
# Persistence Errors
# ============================================================================


class PersistenceError(DomainError):
    """Raised by repository implementations when the backing store fails.

    Covers connection failures, constraint violations, failed cascades and
    rows that cannot be turned back into a valid aggregate. The native
    exception is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        cause: BaseException | None = None,
        order_id: str | None = None,
    ) -> None:
        """Initialize persistence error.

        Args:
            operation: Repository operation that failed (e.g., "save").
            reason: Human-readable failure description.
            cause: Underlying store exception.
            order_id: Order involved, when known.
        """
        super().__init__(
            f"Order repository '{operation}' failed: {reason}",
            details={"operation": operation, "order_id": order_id, "reason": reason},
        )
        self.operation = operation
        self.cause = cause
