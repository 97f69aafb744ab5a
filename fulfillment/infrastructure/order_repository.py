"""SQLAlchemy implementation of the order repository port.

Each operation runs in its own transaction, so a save commits the header
row and the full item set together or not at all, and every read goes to
the database. Store failures surface as ``PersistenceError`` with the
SQLAlchemy exception chained as the cause.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import ColumnElement, exists, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fulfillment.domain.entities import Order
from fulfillment.domain.exceptions import PersistenceError, ValidationError
from fulfillment.domain.repositories import OrderRepository
from fulfillment.domain.state_machines import OrderStatus
from fulfillment.domain.value_objects import OrderId
from fulfillment.infrastructure.database import session_scope
from fulfillment.infrastructure.mappers import OrderMapper
from fulfillment.infrastructure.models import OrderModel

logger = structlog.get_logger()


def _key(order_id: OrderId | str) -> str:
    return order_id.value if isinstance(order_id, OrderId) else str(order_id)


def _status_value(status: OrderStatus | str) -> str:
    try:
        return OrderStatus(status).value
    except ValueError as exc:
        raise ValidationError("status", "is not a known order status", value=status) from exc


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy.

    Example usage:
        engine = build_engine(settings)
        repository = SqlAlchemyOrderRepository(build_session_factory(engine))
        order = repository.save(Order.create(customer_id, items, address))
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory producing sessions bound to the order store.
        """
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self, operation: str, order_id: str | None = None) -> Iterator[Session]:
        """Open a transactional session and translate store failures."""
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error(
                "Order repository operation failed",
                operation=operation,
                order_id=order_id,
                error=str(exc),
            )
            raise PersistenceError(
                operation,
                exc.__class__.__name__,
                cause=exc,
                order_id=order_id,
            ) from exc

    def _find_where(self, operation: str, *conditions: ColumnElement[bool]) -> list[Order]:
        stmt = select(OrderModel)
        if conditions:
            stmt = stmt.where(*conditions)
        with self._transaction(operation) as session:
            models = session.scalars(stmt).all()
            return [OrderMapper.to_domain(model) for model in models]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def save(self, order: Order) -> Order:
        """Insert or update the order and replace its item rows.

        Args:
            order: Order domain aggregate

        Returns:
            The order as rebuilt from the stored rows.
        """
        order_id = order.id.value
        with self._transaction("save", order_id) as session:
            existing = session.get(OrderModel, order_id)
            if existing is None:
                model = OrderMapper.to_persistence(order)
                session.add(model)
            else:
                model = OrderMapper.update_persistence(order, existing)
            session.flush()
            saved = OrderMapper.to_domain(model)

        logger.info(
            "Order saved",
            order_id=order_id,
            status=order.status.value,
            item_count=len(order.items),
            created=existing is None,
        )
        return saved

    def delete_by_id(self, order_id: OrderId | str) -> None:
        """Delete the order and, by cascade, all of its item rows.

        Deleting an unknown id is a no-op.

        Args:
            order_id: Order identifier
        """
        key = _key(order_id)
        with self._transaction("delete", key) as session:
            model = session.get(OrderModel, key)
            if model is None:
                logger.debug("Order not found for delete", order_id=key)
                return
            session.delete(model)
        logger.info("Order deleted", order_id=key)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_id(self, order_id: OrderId | str) -> Order | None:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        key = _key(order_id)
        with self._transaction("find_by_id", key) as session:
            model = session.get(OrderModel, key)
            if model is None:
                return None
            return OrderMapper.to_domain(model)

    def find_by_customer_id(self, customer_id: str) -> list[Order]:
        return self._find_where("find_by_customer_id", OrderModel.customer_id == customer_id)

    def find_by_customer_id_and_status(self, customer_id: str, status: OrderStatus) -> list[Order]:
        return self._find_where(
            "find_by_customer_id_and_status",
            OrderModel.customer_id == customer_id,
            OrderModel.status == _status_value(status),
        )

    def find_recent_by_customer(self, customer_id: str) -> list[Order]:
        """List a customer's orders, newest first.

        Args:
            customer_id: Customer identifier

        Returns:
            Orders sorted by ``created_at`` descending
        """
        stmt = (
            select(OrderModel)
            .where(OrderModel.customer_id == customer_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.order_id)
        )
        with self._transaction("find_recent_by_customer") as session:
            return [OrderMapper.to_domain(model) for model in session.scalars(stmt).all()]

    def find_by_status(self, status: OrderStatus) -> list[Order]:
        return self._find_where("find_by_status", OrderModel.status == _status_value(status))

    def find_all(self) -> list[Order]:
        return self._find_where("find_all")

    def exists_by_id(self, order_id: OrderId | str) -> bool:
        key = _key(order_id)
        with self._transaction("exists_by_id", key) as session:
            return bool(session.scalar(select(exists().where(OrderModel.order_id == key))))

    def exists_by_customer_id(self, customer_id: str) -> bool:
        with self._transaction("exists_by_customer_id") as session:
            return bool(
                session.scalar(select(exists().where(OrderModel.customer_id == customer_id)))
            )

    def count_by_status(self, status: OrderStatus) -> int:
        stmt = (
            select(func.count())
            .select_from(OrderModel)
            .where(OrderModel.status == _status_value(status))
        )
        with self._transaction("count_by_status") as session:
            return session.scalar(stmt) or 0
