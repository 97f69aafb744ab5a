"""Static mappers for domain aggregates ↔ database rows.

Rows are turned back into aggregates through ``Order.reconstitute``,
which takes the complete stored state in one call. Rows that cannot
describe a valid aggregate raise ``PersistenceError``.
"""

from datetime import datetime, timezone
from decimal import Decimal

from fulfillment.domain.entities import Order, OrderItem
from fulfillment.domain.exceptions import DomainError, PersistenceError
from fulfillment.domain.state_machines import OrderStatus
from fulfillment.domain.value_objects import Address, Money, OrderId
from fulfillment.infrastructure.models import OrderItemModel, OrderModel


def _as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to datetimes read back without tzinfo (e.g. SQLite)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class AddressMapper:
    """Static mapper for Address ↔ flattened header columns."""

    @staticmethod
    def to_domain(model: OrderModel) -> Address:
        return Address(
            street=model.street,
            city=model.city,
            state=model.state,
            zip_code=model.zip_code,
            country=model.country,
        )

    @staticmethod
    def apply(address: Address, model: OrderModel) -> None:
        """Write the address onto the header row's columns."""
        model.street = address.street
        model.city = address.city
        model.state = address.state
        model.zip_code = address.zip_code
        model.country = address.country


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        """Convert item row to domain value object.

        Args:
            model: OrderItemModel instance

        Returns:
            OrderItem value object
        """
        return OrderItem(
            product_id=model.product_id,
            product_name=model.product_name,
            unit_price=Money(
                amount=Decimal(str(model.unit_price)),
                currency=model.currency,
            ),
            quantity=model.quantity,
        )

    @staticmethod
    def to_persistence(item: OrderItem, order_id: str, position: int) -> OrderItemModel:
        """Convert domain item to a new item row.

        Args:
            item: OrderItem value object
            order_id: Parent order id
            position: Index of the item in the order's item list

        Returns:
            OrderItemModel instance
        """
        return OrderItemModel(
            order_id=order_id,
            position=position,
            product_id=item.product_id,
            product_name=item.product_name,
            unit_price=item.unit_price.amount,
            currency=item.unit_price.currency,
            quantity=item.quantity,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Reconstruct the aggregate from its header row and item rows.

        Args:
            model: OrderModel instance with items loaded

        Returns:
            Order domain aggregate

        Raises:
            PersistenceError: If the stored status is unknown or the rows
                describe an invalid aggregate.
        """
        try:
            status = OrderStatus(model.status)
        except ValueError as exc:
            raise PersistenceError(
                "load",
                f"unknown order status {model.status!r}",
                cause=exc,
                order_id=model.order_id,
            ) from exc

        try:
            return Order.reconstitute(
                id=OrderId(model.order_id),
                customer_id=model.customer_id,
                items=[OrderItemMapper.to_domain(item) for item in model.items],
                shipping_address=AddressMapper.to_domain(model),
                status=status,
                created_at=_as_utc(model.created_at),
                paid_at=_as_utc(model.paid_at),
                shipped_at=_as_utc(model.shipped_at),
            )
        except DomainError as exc:
            raise PersistenceError(
                "load",
                f"stored order is invalid: {exc.message}",
                cause=exc,
                order_id=model.order_id,
            ) from exc

    @staticmethod
    def to_persistence(order: Order) -> OrderModel:
        """Convert domain aggregate to a new header row with item rows.

        Args:
            order: Order domain aggregate

        Returns:
            OrderModel instance
        """
        model = OrderModel(order_id=order.id.value)
        OrderMapper.update_persistence(order, model)
        return model

    @staticmethod
    def update_persistence(order: Order, model: OrderModel) -> OrderModel:
        """Overwrite an existing row from the aggregate.

        Header columns are rewritten and the item collection is replaced
        wholesale; the old item rows are deleted as orphans.

        Args:
            order: Order domain aggregate
            model: Existing OrderModel instance

        Returns:
            Updated OrderModel instance
        """
        model.customer_id = order.customer_id
        model.status = order.status.value
        model.created_at = order.created_at
        model.paid_at = order.paid_at
        model.shipped_at = order.shipped_at
        AddressMapper.apply(order.shipping_address, model)

        model.items = [
            OrderItemMapper.to_persistence(item, order.id.value, position)
            for position, item in enumerate(order.items)
        ]
        return model
