"""Shared fixtures for order domain and persistence tests."""

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fulfillment.domain import Address, Money, Order, OrderItem
from fulfillment.infrastructure.config import Settings
from fulfillment.infrastructure.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from fulfillment.infrastructure.order_repository import SqlAlchemyOrderRepository


# ============================================================================
# Sample Data Fixtures
# ============================================================================


def make_items() -> list[OrderItem]:
    """Create the Laptop + 2x Mouse line items."""
    return [
        OrderItem.of("PROD001", "Laptop", Money.usd("999.99"), 1),
        OrderItem.of("PROD002", "Mouse", Money.usd("29.99"), 2),
    ]


def make_address() -> Address:
    """Create a test shipping address."""
    return Address.of("123 Main St", "Springfield", "IL", "62701", "US")


def make_order(customer_id: str = "CUST001") -> Order:
    """Create a fresh CREATED order."""
    return Order.create(customer_id, make_items(), make_address())


@pytest.fixture
def items() -> list[OrderItem]:
    return make_items()


@pytest.fixture
def address() -> Address:
    return make_address()


@pytest.fixture
def order() -> Order:
    return make_order()


@pytest.fixture
def order_factory():
    """Factory for CREATED orders of a given customer."""
    return make_order


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine with the schema created and foreign keys on."""
    settings = Settings(database_url="sqlite+pysqlite:///:memory:")
    engine = build_engine(
        settings,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return build_session_factory(engine)


@pytest.fixture
def repository(session_factory: sessionmaker[Session]) -> SqlAlchemyOrderRepository:
    """Order repository backed by the in-memory database."""
    return SqlAlchemyOrderRepository(session_factory)
