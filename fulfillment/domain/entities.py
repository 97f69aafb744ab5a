"""Domain entities for the order fulfillment system.

The Order aggregate root owns its line items and shipping address and
enforces the CREATED -> PAID -> SHIPPED lifecycle. Its state is exposed
through read-only properties; it changes only through the transition
methods, and it is rebuilt from storage only through ``reconstitute``.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import reduce

from fulfillment.domain.base import AggregateRoot, ValueObject, utcnow
from fulfillment.domain.events import (
    OrderCreated,
    OrderItemsReplaced,
    OrderPaid,
    OrderShipped,
)
from fulfillment.domain.exceptions import (
    InvalidQuantityError,
    OrderNotEditableError,
    ValidationError,
)
from fulfillment.domain.state_machines import OrderStatus, validate_order_transition
from fulfillment.domain.value_objects import Address, Money, OrderId


# ============================================================================
# Order Item
# ============================================================================


@dataclass(frozen=True)
class OrderItem(ValueObject):
    """A line item in an order.

    Order items have no identity of their own; two items with the same
    product, price and quantity are interchangeable.

    Attributes:
        product_id: Product identifier.
        product_name: Product name at time of order.
        unit_price: Price per unit.
        quantity: Ordered quantity, always positive.
    """

    product_id: str
    product_name: str
    unit_price: Money
    quantity: int

    def __post_init__(self) -> None:
        """Validate line item fields."""
        for name, max_length in (("product_id", 50), ("product_name", 255)):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(name, "must be a non-empty string", value=value)
            if len(value) > max_length:
                raise ValidationError(name, f"must be at most {max_length} characters", value=value)
        if not isinstance(self.unit_price, Money):
            raise ValidationError("unit_price", "must be Money", value=self.unit_price)
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidQuantityError(self.quantity)
        if self.quantity <= 0:
            raise InvalidQuantityError(self.quantity)

    @classmethod
    def of(cls, product_id: str, product_name: str, unit_price: Money, quantity: int) -> "OrderItem":
        return cls(
            product_id=product_id,
            product_name=product_name,
            unit_price=unit_price,
            quantity=quantity,
        )

    @property
    def subtotal(self) -> Money:
        """Calculate line subtotal.

        Returns:
            Unit price multiplied by quantity.
        """
        return self.unit_price * self.quantity


def _validate_customer_id(customer_id: object) -> str:
    if customer_id is None:
        raise ValidationError("customer_id", "is required")
    if not isinstance(customer_id, str) or not customer_id.strip():
        raise ValidationError("customer_id", "must be a non-empty string", value=customer_id)
    if len(customer_id) > 50:
        raise ValidationError("customer_id", "must be at most 50 characters", value=customer_id)
    return customer_id


def _as_utc_timestamp(field: str, value: object, required: bool = False) -> datetime | None:
    """Return ``value`` converted to UTC; naive datetimes are rejected."""
    if value is None and not required:
        return None
    if not isinstance(value, datetime):
        raise ValidationError(field, "must be a datetime", value=value)
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(field, "must be timezone-aware", value=value)
    return value.astimezone(timezone.utc)


def _validate_items(items: Iterable[OrderItem] | None) -> tuple[OrderItem, ...]:
    if items is None:
        raise ValidationError("items", "are required")
    items = tuple(items)
    if not items:
        raise ValidationError("items", "must contain at least one item")
    for item in items:
        if not isinstance(item, OrderItem):
            raise ValidationError("items", "must all be OrderItem instances", value=item)
    return items


def _validate_address(address: object) -> Address:
    if address is None:
        raise ValidationError("shipping_address", "is required")
    if not isinstance(address, Address):
        raise ValidationError("shipping_address", "must be an Address", value=address)
    return address


# ============================================================================
# Order Aggregate Root
# ============================================================================


class Order(AggregateRoot[OrderId]):
    """Order aggregate root.

    Use ``Order.create`` to start a new order and ``Order.reconstitute`` to
    rebuild one from persisted state. Both go through the constructor, so
    every order, new or loaded, is checked the same way. Timestamps must
    be timezone-aware and are kept in UTC.

    Attributes:
        id: Unique order identifier.
        customer_id: Customer who placed the order.
        items: Order line items, never empty.
        shipping_address: Shipping address.
        status: Current order status.
        created_at: When the order was created.
        paid_at: When the order was paid, if it has been.
        shipped_at: When the order was shipped, if it has been.
    """

    def __init__(
        self,
        *,
        id: OrderId,
        customer_id: str,
        items: Iterable[OrderItem],
        shipping_address: Address,
        status: OrderStatus,
        created_at: datetime,
        paid_at: datetime | None = None,
        shipped_at: datetime | None = None,
    ) -> None:
        if not isinstance(id, OrderId):
            raise ValidationError("order_id", "must be an OrderId", value=id)
        if not isinstance(status, OrderStatus):
            raise ValidationError("status", "must be an OrderStatus", value=status)
        super().__init__(id, _as_utc_timestamp("created_at", created_at, required=True))
        self._customer_id = _validate_customer_id(customer_id)
        self._items = _validate_items(items)
        self._shipping_address = _validate_address(shipping_address)
        self._status = status
        self._paid_at = _as_utc_timestamp("paid_at", paid_at)
        self._shipped_at = _as_utc_timestamp("shipped_at", shipped_at)
        self._check_timestamps()

    def _check_timestamps(self) -> None:
        """Enforce that lifecycle timestamps agree with the status."""
        if (self._paid_at is not None) != self._status.is_paid():
            raise ValidationError(
                "paid_at",
                f"must be set if and only if status is PAID or later (status={self._status.value})",
                value=self._paid_at,
            )
        if (self._shipped_at is not None) != self._status.is_shipped():
            raise ValidationError(
                "shipped_at",
                f"must be set if and only if status is SHIPPED (status={self._status.value})",
                value=self._shipped_at,
            )

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        customer_id: str,
        items: Iterable[OrderItem],
        shipping_address: Address,
    ) -> "Order":
        """Create a new order.

        Assigns a fresh id, sets status to CREATED and stamps ``created_at``.

        Args:
            customer_id: Customer placing the order.
            items: Line items; must not be empty.
            shipping_address: Where to ship the order.

        Returns:
            New Order instance.

        Raises:
            ValidationError: If customer, items or address are missing.
        """
        order = cls(
            id=OrderId.generate(),
            customer_id=_validate_customer_id(customer_id),
            items=_validate_items(items),
            shipping_address=_validate_address(shipping_address),
            status=OrderStatus.CREATED,
            created_at=utcnow(),
        )
        order._record_event(
            OrderCreated(
                aggregate_id=str(order.id),
                aggregate_type="Order",
                order_id=str(order.id),
                customer_id=order.customer_id,
                item_count=order.item_count,
            )
        )
        return order

    @classmethod
    def reconstitute(
        cls,
        *,
        id: OrderId,
        customer_id: str,
        items: Iterable[OrderItem],
        shipping_address: Address,
        status: OrderStatus,
        created_at: datetime,
        paid_at: datetime | None = None,
        shipped_at: datetime | None = None,
    ) -> "Order":
        """Rebuild an order from already persisted state.

        Unlike ``create`` this keeps the given id, status and timestamps
        as they are and records no events. Structural invariants are
        still checked.

        Raises:
            ValidationError: If the given state contradicts itself.
        """
        return cls(
            id=id,
            customer_id=customer_id,
            items=items,
            shipping_address=shipping_address,
            status=status,
            created_at=created_at,
            paid_at=paid_at,
            shipped_at=shipped_at,
        )

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    @property
    def customer_id(self) -> str:
        return self._customer_id

    @property
    def items(self) -> tuple[OrderItem, ...]:
        return self._items

    @property
    def shipping_address(self) -> Address:
        return self._shipping_address

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def paid_at(self) -> datetime | None:
        return self._paid_at

    @property
    def shipped_at(self) -> datetime | None:
        return self._shipped_at

    @property
    def currency(self) -> str:
        """Currency of the order, taken from its first item."""
        return self._items[0].unit_price.currency

    @property
    def total(self) -> Money:
        """Calculate the order total from its items.

        Returns:
            Sum of all item subtotals.

        Raises:
            CurrencyMismatchError: If items are priced in different currencies.
        """
        return reduce(
            lambda acc, item: acc + item.subtotal,
            self._items,
            Money.zero(self.currency),
        )

    @property
    def item_count(self) -> int:
        """Get total number of items.

        Returns:
            Sum of all item quantities.
        """
        return sum(item.quantity for item in self._items)

    # -------------------------------------------------------------------------
    # State Transitions
    # -------------------------------------------------------------------------

    def pay(self) -> None:
        """Mark order as paid.

        Raises:
            InvalidStateTransitionError: If the order is not CREATED.
        """
        validate_order_transition(str(self.id), self._status, OrderStatus.PAID)
        self._paid_at = utcnow()
        self._status = OrderStatus.PAID
        self._record_event(
            OrderPaid(
                aggregate_id=str(self.id),
                aggregate_type="Order",
                order_id=str(self.id),
                paid_at=self._paid_at,
            )
        )

    def ship(self) -> None:
        """Mark order as shipped.

        Raises:
            InvalidStateTransitionError: If the order is not PAID.
        """
        validate_order_transition(str(self.id), self._status, OrderStatus.SHIPPED)
        self._shipped_at = utcnow()
        self._status = OrderStatus.SHIPPED
        self._record_event(
            OrderShipped(
                aggregate_id=str(self.id),
                aggregate_type="Order",
                order_id=str(self.id),
                shipped_at=self._shipped_at,
            )
        )

    def replace_items(self, items: Iterable[OrderItem]) -> None:
        """Replace the whole item list of an unpaid order.

        Args:
            items: New line items; must not be empty.

        Raises:
            OrderNotEditableError: If the order is past CREATED.
            ValidationError: If items are empty.
        """
        if not self._status.is_editable():
            raise OrderNotEditableError(str(self.id), self._status.value)
        new_items = _validate_items(items)
        previous_count = self.item_count
        self._items = new_items
        self._record_event(
            OrderItemsReplaced(
                aggregate_id=str(self.id),
                aggregate_type="Order",
                order_id=str(self.id),
                previous_item_count=previous_count,
                item_count=self.item_count,
            )
        )

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id.value!r}, customer_id={self._customer_id!r}, "
            f"status={self._status.value}, items={len(self._items)})"
        )
