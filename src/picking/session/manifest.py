"""Packing manifest — the per-order result handed to packing and dispatch.

A manifest is derived data: it is rebuilt from the open orders and the
current shortage ledger every time it is asked for, and is never the source
of truth for anything.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PackingLine:
    """Allocation for one order line."""

    order_id: str
    product_id: str
    requested_qty: float
    allocated_qty: float
    has_shortage: bool
    unit: str = ""

    @property
    def shortfall(self) -> float:
        return self.requested_qty - self.allocated_qty

    @property
    def is_cut(self) -> bool:
        """Short, but something is going into the parcel."""
        return self.has_shortage and self.allocated_qty > 0

    @property
    def is_out_of_stock(self) -> bool:
        return self.has_shortage and self.allocated_qty == 0

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "product_id": self.product_id,
            "unit": self.unit,
            "requested_qty": self.requested_qty,
            "allocated_qty": self.allocated_qty,
            "has_shortage": self.has_shortage,
        }


@dataclass(frozen=True)
class PackedOrder:
    """One parcel to pack: an order header and its allocated lines."""

    order_id: str
    client: str
    delivery_time: str | None
    lines: tuple[PackingLine, ...]

    @property
    def has_shortage(self) -> bool:
        return any(line.has_shortage for line in self.lines)

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "client": self.client,
            "delivery_time": self.delivery_time,
            "has_shortage": self.has_shortage,
            "lines": [line.to_dict() for line in self.lines],
        }


@dataclass(frozen=True)
class PackingManifest:
    orders: tuple[PackedOrder, ...] = ()

    @property
    def lines(self) -> list[PackingLine]:
        """One record per order line, in order sequence then line position."""
        return [line for order in self.orders for line in order.lines]

    @property
    def shortage_lines(self) -> list[PackingLine]:
        return [line for line in self.lines if line.has_shortage]

    def for_order(self, order_id: str) -> PackedOrder | None:
        return next((o for o in self.orders if o.order_id == order_id), None)

    def lines_for(self, product_id: str) -> list[PackingLine]:
        return [line for line in self.lines if line.product_id == product_id]

    def to_dict(self) -> dict:
        return {"orders": [order.to_dict() for order in self.orders]}
