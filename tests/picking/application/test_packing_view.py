"""Application tests for the recomputed packing view."""

import pytest
from picking.orders import get_order_source
from picking.orders.port import Order, OrderLine
from picking.session.finishing import FinishPickSession
from picking.session.packing import request_packing_view
from picking.session.reporting import ReportItemDone, ReportShortage
from picking.session.starting import StartPickSession
from protean import current_domain
from protean.exceptions import ValidationError


def _tomato_order(order_id, qty):
    return Order.from_dict({"order_id": order_id, "lines": [{"product_id": "tomato", "requested_qty": qty}]})


def _start_session():
    get_order_source().load_batch("batch-1", [_tomato_order("ORD-A", 5), _tomato_order("ORD-B", 3)])
    return current_domain.process(
        StartPickSession(picker_name="Ana", batch_id="batch-1"),
        asynchronous=False,
    )


def _allocated(manifest):
    return {line.order_id: (line.allocated_qty, line.has_shortage) for line in manifest.lines}


def _shortage(session_id, qty):
    current_domain.process(
        ReportShortage(session_id=session_id, product_id="tomato", actual_qty=qty),
        asynchronous=False,
    )


class TestPackingView:
    def test_no_shortage(self):
        session_id = _start_session()
        assert _allocated(request_packing_view(session_id)) == {"ORD-A": (5, False), "ORD-B": (3, False)}

    def test_partial_shortage(self):
        session_id = _start_session()
        _shortage(session_id, 6)
        assert _allocated(request_packing_view(session_id)) == {"ORD-A": (5, False), "ORD-B": (1, True)}

    def test_zero_availability(self):
        session_id = _start_session()
        _shortage(session_id, 0)
        assert _allocated(request_packing_view(session_id)) == {"ORD-A": (0, True), "ORD-B": (0, True)}

    def test_view_reflects_revised_shortage(self):
        session_id = _start_session()
        _shortage(session_id, 6)
        first = request_packing_view(session_id)

        _shortage(session_id, 2)
        second = request_packing_view(session_id)

        assert _allocated(first)["ORD-A"] == (5, False)
        assert _allocated(second) == {"ORD-A": (2, True), "ORD-B": (0, True)}

    def test_done_after_shortage_restores_full_allocation(self):
        session_id = _start_session()
        _shortage(session_id, 1)
        current_domain.process(
            ReportItemDone(session_id=session_id, product_id="tomato"),
            asynchronous=False,
        )
        assert _allocated(request_packing_view(session_id)) == {"ORD-A": (5, False), "ORD-B": (3, False)}


class TestOrderSequence:
    def test_sequence_captured_at_start_wins_over_source_reordering(self):
        session_id = _start_session()
        _shortage(session_id, 4)
        get_order_source().load_batch("batch-1", [_tomato_order("ORD-B", 3), _tomato_order("ORD-A", 5)])

        manifest = request_packing_view(session_id)
        assert [o.order_id for o in manifest.orders] == ["ORD-A", "ORD-B"]
        assert _allocated(manifest) == {"ORD-A": (4, True), "ORD-B": (0, True)}

    def test_orders_joining_after_start_are_not_packed(self):
        session_id = _start_session()
        get_order_source().add_order("batch-1", _tomato_order("ORD-LATE", 1))
        assert [o.order_id for o in request_packing_view(session_id).orders] == ["ORD-A", "ORD-B"]

    def test_closed_orders_are_dropped(self):
        session_id = _start_session()
        _shortage(session_id, 3)
        get_order_source().close_order("batch-1", "ORD-A")
        assert _allocated(request_packing_view(session_id)) == {"ORD-B": (3, False)}


class TestClosedSession:
    def test_packing_view_unavailable_after_finish(self):
        session_id = _start_session()
        current_domain.process(FinishPickSession(session_id=session_id), asynchronous=False)
        with pytest.raises(ValidationError):
            request_packing_view(session_id)


class TestNonStringIdentifiers:
    def test_shortage_applies_to_integer_product_ids(self):
        orders = [
            Order(order_id=1, lines=(OrderLine(order_id=1, product_id=7, requested_qty=5),)),
            Order(order_id=2, lines=(OrderLine(order_id=2, product_id=7, requested_qty=3),)),
        ]
        get_order_source().load_batch("batch-int", orders)
        session_id = current_domain.process(
            StartPickSession(picker_name="Ana", batch_id="batch-int"),
            asynchronous=False,
        )
        current_domain.process(
            ReportShortage(session_id=session_id, product_id="7", actual_qty=0),
            asynchronous=False,
        )

        manifest = request_packing_view(session_id)
        assert _allocated(manifest) == {"1": (0, True), "2": (0, True)}
        assert sum(line.allocated_qty for line in manifest.lines_for("7")) == 0
