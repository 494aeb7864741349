"""Packing allocation — split picked stock back out into per-order parcels.

Greedy first-come-first-served rationing: orders are served in the exact
sequence supplied, and within an order in line position. Products without a
shortage entry are allocated in full. For a product with a reported
available quantity, a running remainder is consumed line by line:

    remaining >= requested  ->  full line, no shortage
    0 < remaining < requested  ->  whatever is left, shortage
    remaining == 0  ->  nothing, shortage

Comparisons allow QTY_TOLERANCE of float drift, so 0.3 kg found over lines
of 0.1 and 0.2 kg fills both. Ledger entries for products no order
references are ignored. The function is pure and is meant to be called
again whenever the ledger changes.
"""

from picking.orders.port import Order
from picking.session.ledger import ShortageLedger
from picking.session.manifest import PackedOrder, PackingLine, PackingManifest

QTY_TOLERANCE = 1e-9


def allocate(orders: list[Order], ledger: ShortageLedger) -> PackingManifest:
    remaining: dict[str, float] = {}
    packed = []

    for order in orders:
        lines = []
        for line in order.lines:
            available = ledger.get(line.product_id)
            if available is None:
                lines.append(_line(line, line.requested_qty, has_shortage=False))
                continue

            pool = remaining.setdefault(line.product_id, available)
            if pool + QTY_TOLERANCE >= line.requested_qty:
                remaining[line.product_id] = max(pool - line.requested_qty, 0)
                lines.append(_line(line, line.requested_qty, has_shortage=False))
            elif pool > QTY_TOLERANCE:
                remaining[line.product_id] = 0
                lines.append(_line(line, pool, has_shortage=True))
            else:
                lines.append(_line(line, 0, has_shortage=True))

        packed.append(
            PackedOrder(
                order_id=order.order_id,
                client=order.client,
                delivery_time=order.delivery_time,
                lines=tuple(lines),
            )
        )

    return PackingManifest(orders=tuple(packed))


def _line(order_line, allocated_qty: float, has_shortage: bool) -> PackingLine:
    return PackingLine(
        order_id=order_line.order_id,
        product_id=order_line.product_id,
        requested_qty=order_line.requested_qty,
        allocated_qty=allocated_qty,
        has_shortage=has_shortage,
        unit=order_line.unit,
    )
