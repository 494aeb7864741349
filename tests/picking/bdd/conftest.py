"""Shared BDD fixtures and step definitions for the Picking domain."""

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
from pytest_bdd import given, parsers, then

_PICKING_EVENT_CLASSES = {
    "PickSessionStarted": PickSessionStarted,
    "PickItemConfirmed": PickItemConfirmed,
    "ShortageReported": ShortageReported,
    "PickSessionFinished": PickSessionFinished,
    "PickSessionAbandoned": PickSessionAbandoned,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def orders():
    """Orders of the batch under test, in allocation sequence."""
    return []


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('order "{order_id}" requests {qty:g} kg of "{product_id}"'))
def order_requests(orders, order_id, qty, product_id):
    orders.append(
        Order.from_dict(
            {
                "order_id": order_id,
                "lines": [{"product_id": product_id, "requested_qty": qty, "unit": "Kg"}],
            }
        )
    )


@given(parsers.cfparse('picker "{picker_name}" starts a session over the batch'), target_fixture="session")
def session_started(orders, picker_name):
    session = PickSession.start(picker_name=picker_name, batch_id="batch-bdd", orders=orders)
    session._events.clear()
    return session


@given(parsers.cfparse('a shortage of {qty:g} kg was reported for "{product_id}"'), target_fixture="session")
def shortage_already_reported(session, qty, product_id):
    session.report_shortage(product_id, qty)
    session._events.clear()
    return session


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('order "{order_id}" is allocated {qty:g} kg of "{product_id}" without shortage'))
def allocated_without_shortage(session, orders, order_id, qty, product_id):
    line = session.packing_manifest(orders).for_order(order_id).lines_for(product_id)[0]
    assert line.allocated_qty == qty
    assert line.has_shortage is False


@then(parsers.cfparse('order "{order_id}" is allocated {qty:g} kg of "{product_id}" with shortage'))
def allocated_with_shortage(session, orders, order_id, qty, product_id):
    line = session.packing_manifest(orders).for_order(order_id).lines_for(product_id)[0]
    assert line.allocated_qty == qty
    assert line.has_shortage is True


@then(parsers.cfparse('the ledger holds {qty:g} kg for "{product_id}"'))
def ledger_holds(session, qty, product_id):
    assert session.ledger.get(product_id) == qty


@then(parsers.cfparse('the ledger holds nothing for "{product_id}"'))
def ledger_holds_nothing(session, product_id):
    assert product_id not in session.ledger


@then(parsers.cfparse('the session status is "{status}"'))
def session_status_is(session, status):
    assert session.status == status


@then("the picking action fails with a validation error")
def picking_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def picking_event_raised(session, event_type):
    event_cls = _PICKING_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in session._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in session._events]}"
