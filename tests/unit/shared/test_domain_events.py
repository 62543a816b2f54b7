"""Unit tests for domain event primitives."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.orders.events import ListingsSold, OrderPlaced
from modules.orders.models import Order
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


def test_order_registers_and_clears_domain_events():
    order = Order(buyer_id=uuid4(), total_price=Decimal("0.00"))

    assert order.domain_events == []

    event = OrderPlaced(aggregate_id=order.id)
    order.add_domain_event(event)

    assert order.domain_events == [event]
    assert event.event_name == "OrderPlaced"

    order.clear_domain_events()
    assert order.domain_events == []


def test_payload_is_json_safe():
    aggregate_id = uuid4()
    payload = ListingsSold(
        aggregate_id=aggregate_id, seller_id="s", listing_ids=("a",)
    ).to_payload()

    assert payload["aggregate_id"] == str(aggregate_id)
    assert payload["listing_ids"] == ["a"]
    assert payload["event_name"] == "ListingsSold"
    assert isinstance(payload["occurred_on"], str)


class _RecordingHandler:
    def __init__(self) -> None:
        self.seen = []

    def handle(self, event) -> None:
        self.seen.append(event)


class TestInMemoryEventBus:
    def test_publish_routes_by_exact_class(self):
        bus = InMemoryEventBus()
        handler = _RecordingHandler()
        bus.subscribe(OrderPlaced, handler)

        placed = OrderPlaced(aggregate_id=uuid4())
        assert bus.publish(placed) == 1
        assert bus.publish(ListingsSold(aggregate_id=uuid4())) == 0
        assert handler.seen == [placed]

    def test_subscribe_is_idempotent(self):
        bus = InMemoryEventBus()
        handler = _RecordingHandler()
        bus.subscribe(OrderPlaced, handler)
        bus.subscribe(OrderPlaced, handler)
        assert bus.publish(OrderPlaced(aggregate_id=uuid4())) == 1

    def test_resolve_by_name(self):
        bus = InMemoryEventBus()
        bus.subscribe(OrderPlaced, _RecordingHandler())
        assert bus.resolve("OrderPlaced") is OrderPlaced
        assert bus.resolve("Unknown") is None
