"""Pick aggregation — one consolidated pick per product across a batch.

The picker never sees per-order quantities: every order line referencing a
product is folded into that product's total. Pure and re-runnable.
"""

import structlog

from picking.orders.port import Order
from picking.session.session import PickItem, PickItemStatus

logger = structlog.get_logger(__name__)


def consolidate(orders: list[Order]) -> list[dict]:
    """Sum requested quantities per product, in first-appearance order.

    Returns plain dicts (product_id, total_qty, unit) so callers can build
    entities or views from them.
    """
    totals: dict[str, dict] = {}
    for order in orders:
        for line in order.lines:
            entry = totals.get(line.product_id)
            if entry is None:
                totals[line.product_id] = {
                    "product_id": line.product_id,
                    "total_qty": line.requested_qty,
                    "unit": line.unit,
                }
                continue
            if line.unit and entry["unit"] and line.unit != entry["unit"]:
                logger.warning(
                    "Unit mismatch while consolidating product",
                    product_id=line.product_id,
                    order_id=line.order_id,
                    expected_unit=entry["unit"],
                    line_unit=line.unit,
                )
            entry["total_qty"] += line.requested_qty
    return list(totals.values())


def aggregate_pick_items(orders: list[Order]) -> list[PickItem]:
    """Build one pending PickItem per distinct product in the batch."""
    return [PickItem(status=PickItemStatus.PENDING.value, **entry) for entry in consolidate(orders)]
