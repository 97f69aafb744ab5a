"""SQLAlchemy models for database tables.

Row-shaped representation of the order aggregate: one ``orders`` header
row with the shipping address flattened into it, and one ``order_items``
row per line item. These types never leave the infrastructure layer.
"""

from typing import Any

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from fulfillment.infrastructure.database import Base


# ============================================================================
# Order Models
# ============================================================================


class OrderModel(Base):
    """Order header row.

    Holds identity, customer, lifecycle status and timestamps, and the
    five flattened shipping address columns.
    """

    __tablename__ = "orders"

    order_id = Column(String(50), primary_key=True)
    customer_id = Column(String(50), nullable=False, index=True)
    status = Column(String(20), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    shipped_at = Column(DateTime(timezone=True), nullable=True)

    # Shipping address
    street = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(2), nullable=False)
    zip_code = Column(String(10), nullable=False)
    country = Column(String(2), nullable=False)

    # Relationships
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
        lazy="selectin",
        passive_deletes=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "order_id": self.order_id,
            "customer_id": self.customer_id,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
            "shipped_at": self.shipped_at.isoformat() if self.shipped_at else None,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
            "items": [item.to_dict() for item in self.items],
        }


class OrderItemModel(Base):
    """Order item row.

    Line items have no identity in the domain; ``id`` is a surrogate key
    and ``position`` keeps the order of the item list.
    """

    __tablename__ = "order_items"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        String(50),
        ForeignKey("orders.order_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    product_id = Column(String(50), nullable=False)
    product_name = Column(String(255), nullable=False)
    unit_price = Column(Numeric(19, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    quantity = Column(Integer, nullable=False)

    # Relationships
    order = relationship("OrderModel", back_populates="items")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "order_id": self.order_id,
            "position": self.position,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "unit_price": str(self.unit_price),
            "currency": self.currency,
            "quantity": self.quantity,
        }
