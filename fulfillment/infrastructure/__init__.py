"""Infrastructure layer - configuration, logging and SQLAlchemy persistence."""

from fulfillment.infrastructure.config import Settings, get_settings
from fulfillment.infrastructure.database import (
    build_engine,
    build_session_factory,
    create_schema,
    session_scope,
)
from fulfillment.infrastructure.logging import configure_logging
from fulfillment.infrastructure.order_repository import SqlAlchemyOrderRepository

__all__ = [
    "Settings",
    "get_settings",
    "build_engine",
    "build_session_factory",
    "create_schema",
    "session_scope",
    "configure_logging",
    "SqlAlchemyOrderRepository",
]
