"""Repository port for the order aggregate.

This is the only contract the rest of the system uses to reach storage.
It accepts and returns domain aggregates, never row-shaped types.
Implementations raise ``PersistenceError`` when the backing store fails
and never retry on their own.
"""

from abc import ABC, abstractmethod

from fulfillment.domain.entities import Order
from fulfillment.domain.exceptions import OrderNotFoundError
from fulfillment.domain.state_machines import OrderStatus
from fulfillment.domain.value_objects import OrderId


class OrderRepository(ABC):
    """Abstract persistence contract for ``Order`` aggregates.

    Every operation is synchronous and all-or-nothing. ``order_id``
    arguments accept either an ``OrderId`` or its string form.
    """

    @abstractmethod
    def save(self, order: Order) -> Order:
        """Store or update the full aggregate.

        The header row, the embedded address and the complete item set are
        written in one transaction; existing item rows are replaced, never
        diffed.

        Args:
            order: Aggregate to persist.

        Returns:
            The aggregate as rebuilt from the stored rows.
        """

    @abstractmethod
    def find_by_id(self, order_id: OrderId | str) -> Order | None:
        """Find an order by id, or None if it is unknown."""

    def get_by_id(self, order_id: OrderId | str) -> Order:
        """Get an order by id.

        Raises:
            OrderNotFoundError: If no order has this id.
        """
        order = self.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(str(order_id))
        return order

    @abstractmethod
    def find_by_customer_id(self, customer_id: str) -> list[Order]:
        """Find all orders of a customer, in no guaranteed order."""

    @abstractmethod
    def find_by_customer_id_and_status(self, customer_id: str, status: OrderStatus) -> list[Order]:
        """Find a customer's orders that are in the given status."""

    @abstractmethod
    def find_recent_by_customer(self, customer_id: str) -> list[Order]:
        """Find all orders of a customer, newest ``created_at`` first."""

    @abstractmethod
    def find_by_status(self, status: OrderStatus) -> list[Order]:
        """Find all orders in the given status."""

    @abstractmethod
    def find_all(self) -> list[Order]:
        """Return every stored order."""

    @abstractmethod
    def delete_by_id(self, order_id: OrderId | str) -> None:
        """Remove an order and all of its items.

        Deleting an id that does not exist is a no-op.
        """

    @abstractmethod
    def exists_by_id(self, order_id: OrderId | str) -> bool:
        """Check whether an order with this id is stored."""

    @abstractmethod
    def exists_by_customer_id(self, customer_id: str) -> bool:
        """Check whether the customer has at least one stored order."""

    @abstractmethod
    def count_by_status(self, status: OrderStatus) -> int:
        """Count stored orders in the given status."""
