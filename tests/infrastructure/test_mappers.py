"""Tests for the row <-> aggregate mappers."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from fulfillment.domain import Money, Order, OrderStatus
from fulfillment.domain.exceptions import PersistenceError
from fulfillment.infrastructure.mappers import OrderItemMapper, OrderMapper
from fulfillment.infrastructure.models import OrderItemModel, OrderModel


def _assert_same_order(actual: Order, expected: Order) -> None:
    assert actual.id == expected.id
    assert actual.customer_id == expected.customer_id
    assert actual.status == expected.status
    assert actual.items == expected.items
    assert actual.shipping_address == expected.shipping_address
    assert actual.created_at == expected.created_at
    assert actual.paid_at == expected.paid_at
    assert actual.shipped_at == expected.shipped_at


class TestOrderMapper:
    """Tests for OrderMapper without a database."""

    @pytest.mark.parametrize("steps", [0, 1, 2], ids=["created", "paid", "shipped"])
    def test_round_trip(self, order: Order, steps: int) -> None:
        """Every lifecycle stage maps back to an equal aggregate."""
        if steps >= 1:
            order.pay()
        if steps >= 2:
            order.ship()

        model = OrderMapper.to_persistence(order)
        _assert_same_order(OrderMapper.to_domain(model), order)

    def test_to_persistence_flattens_address(self, order: Order) -> None:
        """Address fields become header columns."""
        model = OrderMapper.to_persistence(order)
        assert model.order_id == order.id.value
        assert model.status == "CREATED"
        assert model.street == "123 Main St"
        assert model.city == "Springfield"
        assert model.state == "IL"
        assert model.zip_code == "62701"
        assert model.country == "US"

    def test_item_positions_follow_order(self, order: Order) -> None:
        """Item rows carry their index in the item list."""
        model = OrderMapper.to_persistence(order)
        assert [(row.position, row.product_id) for row in model.items] == [
            (0, "PROD001"),
            (1, "PROD002"),
        ]

    def test_reconstituted_order_has_no_events(self, order: Order) -> None:
        """Loading records no domain events."""
        loaded = OrderMapper.to_domain(OrderMapper.to_persistence(order))
        assert loaded.collect_events() == []

    def test_update_replaces_items(self, order: Order) -> None:
        """Updating rebuilds the item collection."""
        model = OrderMapper.to_persistence(order)
        order.replace_items([order.items[1]])

        OrderMapper.update_persistence(order, model)

        assert len(model.items) == 1
        assert model.items[0].product_id == "PROD002"
        assert model.items[0].position == 0

    def test_naive_timestamps_read_as_utc(self, order: Order) -> None:
        """Timestamps without tzinfo are taken to be UTC."""
        model = OrderMapper.to_persistence(order)
        model.created_at = datetime(2024, 1, 15, 10, 30)

        loaded = OrderMapper.to_domain(model)

        assert loaded.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_unknown_status_raises_persistence_error(self, order: Order) -> None:
        """Statuses outside the lifecycle cannot be loaded."""
        model = OrderMapper.to_persistence(order)
        model.status = "CANCELLED"

        with pytest.raises(PersistenceError) as exc_info:
            OrderMapper.to_domain(model)

        assert exc_info.value.operation == "load"
        assert "CANCELLED" in exc_info.value.message

    def test_contradictory_row_raises_persistence_error(self, order: Order) -> None:
        """A PAID row without paid_at is not a valid order."""
        model = OrderMapper.to_persistence(order)
        model.status = "PAID"

        with pytest.raises(PersistenceError):
            OrderMapper.to_domain(model)

    def test_row_without_items_raises_persistence_error(self, order: Order) -> None:
        """Header rows need at least one item row."""
        model = OrderMapper.to_persistence(order)
        model.items = []

        with pytest.raises(PersistenceError):
            OrderMapper.to_domain(model)


class TestOrderItemMapper:
    """Tests for OrderItemMapper."""

    def test_to_domain(self) -> None:
        """Price and currency columns become Money."""
        row = OrderItemModel(
            order_id="ORD-1",
            position=0,
            product_id="PROD001",
            product_name="Laptop",
            unit_price=Decimal("999.99"),
            currency="USD",
            quantity=1,
        )
        item = OrderItemMapper.to_domain(row)
        assert item.unit_price == Money.usd("999.99")
        assert item.quantity == 1

    def test_to_persistence(self, order: Order) -> None:
        """Item rows keep the parent id and position."""
        row = OrderItemMapper.to_persistence(order.items[1], "ORD-1", 1)
        assert row.order_id == "ORD-1"
        assert row.position == 1
        assert row.unit_price == Decimal("29.99")
        assert row.currency == "USD"
        assert row.quantity == 2


def test_model_to_dict(order: Order) -> None:
    """Header rows serialize their columns and items."""
    model: OrderModel = OrderMapper.to_persistence(order)
    data = model.to_dict()
    assert data["order_id"] == order.id.value
    assert data["status"] == OrderStatus.CREATED.value
    assert len(data["items"]) == 2
