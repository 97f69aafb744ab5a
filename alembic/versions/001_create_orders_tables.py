"""Create orders and order_items tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create orders and order_items tables."""
    # Create orders table
    op.create_table(
        "orders",
        sa.Column("order_id", sa.String(50), primary_key=True),
        sa.Column("customer_id", sa.String(50), nullable=False, index=True),
        sa.Column("status", sa.String(20), nullable=False, index=True),
        # Timestamps
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("shipped_at", sa.DateTime(timezone=True), nullable=True),
        # Shipping address
        sa.Column("street", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("state", sa.String(2), nullable=False),
        sa.Column("zip_code", sa.String(10), nullable=False),
        sa.Column("country", sa.String(2), nullable=False),
    )

    # Create order_items table
    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "order_id",
            sa.String(50),
            sa.ForeignKey("orders.order_id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("product_id", sa.String(50), nullable=False),
        sa.Column("product_name", sa.String(255), nullable=False),
        sa.Column("unit_price", sa.Numeric(19, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )


def downgrade() -> None:
    """Drop order_items and orders tables."""
    op.drop_table("order_items")
    op.drop_table("orders")
