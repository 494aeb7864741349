"""Tests for PickSession domain events — each transition raises the right event."""

import json

import pytest
from picking.orders.port import Order
from picking.session.events import (
    PickItemConfirmed,
    PickSessionAbandoned,
    PickSessionFinished,
    PickSessionStarted,
    ShortageReported,
)
from picking.session.session import PickSession
from protean.exceptions import ValidationError


def _orders():
    return [
        Order.from_dict({"order_id": "ORD-A", "lines": [{"product_id": "tomato", "requested_qty": 5}]}),
        Order.from_dict({"order_id": "ORD-B", "lines": [{"product_id": "tomato", "requested_qty": 3}]}),
    ]


def _make_session():
    session = PickSession.start(picker_name="Ana", batch_id="batch-1", orders=_orders())
    return session


class TestPickSessionStartedEvent:
    def test_raises_event(self):
        session = _make_session()
        assert len(session._events) == 1
        assert isinstance(session._events[0], PickSessionStarted)

    def test_event_counts(self):
        event = _make_session()._events[0]
        assert event.order_count == 2
        assert event.item_count == 1
        assert event.picker_name == "Ana"


class TestPickItemConfirmedEvent:
    def test_plain_confirmation(self):
        session = _make_session()
        session._events.clear()
        session.report_done("tomato")
        event = session._events[-1]
        assert isinstance(event, PickItemConfirmed)
        assert event.shortage_cleared is False
        assert event.total_qty == 8

    def test_confirmation_after_shortage_flags_clearing(self):
        session = _make_session()
        session.report_shortage("tomato", 6)
        session.report_done("tomato")
        assert session._events[-1].shortage_cleared is True


class TestShortageReportedEvent:
    def test_carries_expected_and_actual(self):
        session = _make_session()
        session.report_shortage("tomato", 6)
        event = session._events[-1]
        assert isinstance(event, ShortageReported)
        assert event.expected_qty == 8
        assert event.actual_qty == 6

    def test_rejected_report_raises_no_event(self):
        session = _make_session()
        session._events.clear()
        with pytest.raises(ValidationError):
            session.report_shortage("tomato", -1)
        assert session._events == []


class TestSessionEndEvents:
    def test_finished_event_carries_manifest(self):
        session = _make_session()
        session.report_shortage("tomato", 6)
        session.finish(_orders(), elapsed_seconds=42)
        event = session._events[-1]
        assert isinstance(event, PickSessionFinished)
        assert event.elapsed_seconds == 42
        assert event.shortage_line_count == 1
        manifest = json.loads(event.manifest)
        assert [o["order_id"] for o in manifest["orders"]] == ["ORD-A", "ORD-B"]
        assert manifest["orders"][1]["lines"][0]["allocated_qty"] == 1

    def test_abandoned_event(self):
        session = _make_session()
        session.abandon()
        assert isinstance(session._events[-1], PickSessionAbandoned)
