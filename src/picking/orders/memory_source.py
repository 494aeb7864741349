"""In-memory order source — deterministic order batches for development and tests.

Batches keep their orders in insertion order, which is the sequence handed
to the packing allocator.
"""

from picking.orders.port import Order, OrderSource

DEMO_BATCH_ID = "demo"


def demo_orders() -> list[Order]:
    """Two restaurant orders sharing one product, as used on the demo floor."""
    return [
        Order.from_dict(
            {
                "order_id": "ORD-101",
                "client": "Restaurante El Rey",
                "delivery_time": "08:00",
                "lines": [
                    {"product_id": "TOM-001", "requested_qty": 5, "unit": "Kg"},
                    {"product_id": "CEB-002", "requested_qty": 10, "unit": "Kg"},
                ],
            }
        ),
        Order.from_dict(
            {
                "order_id": "ORD-102",
                "client": "La Pizzeria",
                "delivery_time": "09:00",
                "lines": [
                    {"product_id": "TOM-001", "requested_qty": 3, "unit": "Kg"},
                    {"product_id": "LIM-003", "requested_qty": 20, "unit": "Lb"},
                ],
            }
        ),
    ]


class InMemoryOrderSource(OrderSource):
    """Order source backed by a dict of batch id to ordered order list."""

    def __init__(self):
        self._batches: dict[str, list[Order]] = {}

    def load_batch(self, batch_id: str, orders: list[Order]) -> None:
        """Replace the open orders of a batch."""
        self._batches[batch_id] = list(orders)

    def add_order(self, batch_id: str, order: Order) -> None:
        """Append an order to the end of a batch's sequence."""
        self._batches.setdefault(batch_id, []).append(order)

    def close_order(self, batch_id: str, order_id: str) -> None:
        """Remove an order from a batch (dispatched, cancelled, ...)."""
        orders = self._batches.get(batch_id, [])
        self._batches[batch_id] = [o for o in orders if o.order_id != order_id]

    def clear(self) -> None:
        self._batches.clear()

    def get_open_orders(self, batch_id: str) -> list[Order]:
        return list(self._batches.get(batch_id, []))
