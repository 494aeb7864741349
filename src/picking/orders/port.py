"""Order source port — where a pick run gets its open orders from.

Orders are owned by the order-management system and are read-only here.
The sequence in which a source returns a batch's orders is part of the
contract: packing allocation serves orders first-come-first-served in that
sequence, so adapters must return a stable order for a given batch.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from protean.exceptions import ValidationError


@dataclass(frozen=True)
class OrderLine:
    """One product requested by one order."""

    order_id: str
    product_id: str
    requested_qty: float
    unit: str = ""

    def __post_init__(self):
        qty = self.requested_qty
        if isinstance(qty, bool) or not isinstance(qty, int | float) or not math.isfinite(qty) or qty <= 0:
            raise ValidationError({"requested_qty": [f"Requested quantity must be a positive number, got {qty!r}"]})

        # Shortage entries are keyed by string product id
        object.__setattr__(self, "order_id", str(self.order_id))
        object.__setattr__(self, "product_id", str(self.product_id))


@dataclass(frozen=True)
class Order:
    """An open customer order taking part in a pick run."""

    order_id: str
    client: str = ""
    delivery_time: str | None = None
    lines: tuple[OrderLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "order_id", str(self.order_id))
        object.__setattr__(self, "lines", tuple(self.lines))

    @classmethod
    def from_dict(cls, data: dict) -> "Order":
        """Build an order from a plain payload (API body, fixture, seed file)."""
        order_id = str(data["order_id"])
        lines = tuple(
            OrderLine(
                order_id=order_id,
                product_id=str(line["product_id"]),
                requested_qty=line["requested_qty"],
                unit=line.get("unit") or "",
            )
            for line in data.get("lines", [])
        )
        return cls(
            order_id=order_id,
            client=data.get("client") or "",
            delivery_time=data.get("delivery_time"),
            lines=lines,
        )


class OrderSource(ABC):
    """Abstract interface for order-management collaborators."""

    @abstractmethod
    def get_open_orders(self, batch_id: str) -> list[Order]:
        """Return the open orders of a batch, in their fixed pick-run sequence."""
        ...
