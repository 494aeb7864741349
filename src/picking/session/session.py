"""PickSession aggregate (CQRS) — the core of the picking domain.

One picker works one batch of open orders. The batch is consolidated into
one PickItem per product; the picker confirms items or reports shortages,
and shortage reports are kept as ShortageEntry children (the shortage
ledger). Packing manifests are derived from the ledger on demand.

Item states:
    PENDING → DONE | SHORTAGE
    DONE ⇄ SHORTAGE, SHORTAGE → SHORTAGE (report overwrites)
    Marking an item DONE always clears its shortage entry.

Session states:
    ACTIVE → FINISHED | ABANDONED
"""

import json
import math
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from picking.domain import picking
from picking.session.events import (
    PickItemConfirmed,
    PickSessionAbandoned,
    PickSessionFinished,
    PickSessionStarted,
    ShortageReported,
)
from picking.session.exceptions import StalePickItemError, UnknownProductError
from picking.session.ledger import ShortageLedger


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class PickSessionStatus(Enum):
    ACTIVE = "Active"
    FINISHED = "Finished"
    ABANDONED = "Abandoned"


class PickItemStatus(Enum):
    PENDING = "Pending"
    DONE = "Done"
    SHORTAGE = "Shortage"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@picking.entity(part_of="PickSession")
class PickItem:
    """Consolidated demand for one product across the whole batch."""

    product_id = Identifier(required=True)
    total_qty = Float(required=True, min_value=0.0)
    unit = String(max_length=20)
    status = String(
        max_length=20,
        choices=PickItemStatus,
        default=PickItemStatus.PENDING.value,
    )
    version = Integer(default=0)


@picking.entity(part_of="PickSession")
class ShortageEntry:
    """Last reported available quantity for a product picked short."""

    product_id = Identifier(required=True)
    available_qty = Float(required=True, min_value=0.0)


def validate_quantity(value) -> float:
    """Coerce a picker-entered quantity, rejecting anything but a finite number >= 0."""
    if value is None or isinstance(value, bool):
        raise ValidationError({"actual_qty": ["Actual quantity is required"]})
    try:
        qty = float(value)
    except (TypeError, ValueError):
        raise ValidationError({"actual_qty": [f"Actual quantity must be a number, got {value!r}"]}) from None
    if not math.isfinite(qty):
        raise ValidationError({"actual_qty": [f"Actual quantity must be a finite number, got {value!r}"]})
    if qty < 0:
        raise ValidationError({"actual_qty": ["Actual quantity cannot be negative"]})
    return qty


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@picking.aggregate
class PickSession:
    picker_name = String(required=True, max_length=100)
    batch_id = String(required=True, max_length=100)
    status = String(
        choices=PickSessionStatus,
        default=PickSessionStatus.ACTIVE.value,
    )
    order_sequence = Text()  # JSON list of order ids, in allocation order
    items = HasMany(PickItem)
    shortages = HasMany(ShortageEntry)
    started_at = DateTime()
    ended_at = DateTime()

    @invariant.post
    def shortages_reference_batch_products(self):
        product_ids = {str(i.product_id) for i in (self.items or [])}
        strays = [str(s.product_id) for s in (self.shortages or []) if str(s.product_id) not in product_ids]
        if strays:
            raise ValidationError({"shortages": [f"Shortage recorded for products outside the batch: {strays}"]})

    @invariant.post
    def one_shortage_entry_per_product(self):
        product_ids = [str(s.product_id) for s in (self.shortages or [])]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"shortages": ["Only one shortage entry per product is allowed"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, picker_name: str, batch_id: str, orders: list):
        """Start a pick run over the given orders, in their supplied sequence."""
        from picking.session.aggregation import aggregate_pick_items

        if not picker_name or not picker_name.strip():
            raise ValidationError({"picker_name": ["Picker name is required to start a session"]})

        order_ids = [order.order_id for order in orders]
        duplicates = sorted({order_id for order_id in order_ids if order_ids.count(order_id) > 1})
        if duplicates:
            raise ValidationError({"orders": [f"Batch {batch_id} lists orders more than once: {duplicates}"]})

        now = datetime.now(UTC)
        session = cls(
            picker_name=picker_name.strip(),
            batch_id=batch_id,
            status=PickSessionStatus.ACTIVE.value,
            order_sequence=json.dumps(order_ids),
            started_at=now,
        )
        pick_items = aggregate_pick_items(orders)
        for item in pick_items:
            session.add_items(item)

        session.raise_(
            PickSessionStarted(
                session_id=str(session.id),
                picker_name=session.picker_name,
                batch_id=batch_id,
                order_count=len(orders),
                item_count=len(pick_items),
                started_at=now,
            )
        )
        return session

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ledger(self) -> ShortageLedger:
        """Snapshot of the shortage ledger."""
        return ShortageLedger.from_entries(self.shortages)

    @property
    def order_ids(self) -> list[str]:
        return json.loads(self.order_sequence) if self.order_sequence else []

    @property
    def pending_items(self) -> list[PickItem]:
        """The picker's work queue: items neither confirmed nor reported short."""
        return [i for i in (self.items or []) if i.status == PickItemStatus.PENDING.value]

    @property
    def nothing_to_pick(self) -> bool:
        return not self.items

    @property
    def all_picked(self) -> bool:
        return bool(self.items) and not self.pending_items

    @property
    def is_active(self) -> bool:
        return self.status == PickSessionStatus.ACTIVE.value

    def item_for(self, product_id: str) -> PickItem:
        item = next((i for i in (self.items or []) if str(i.product_id) == str(product_id)), None)
        if item is None:
            raise UnknownProductError(f"Product `{product_id}` is not part of pick session `{self.id}`")
        return item

    def status_of(self, product_id: str) -> PickItemStatus:
        return PickItemStatus(self.item_for(product_id).status)

    def order_in_sequence(self, orders: list) -> list:
        """Arrange freshly read orders in the sequence captured at start.

        Orders that are no longer open are skipped; orders that joined the
        batch after the session started are not part of this run.
        """
        by_id = {order.order_id: order for order in orders}
        return [by_id[order_id] for order_id in self.order_ids if order_id in by_id]

    # -------------------------------------------------------------------
    # Picking
    # -------------------------------------------------------------------
    def _assert_active(self) -> None:
        if not self.is_active:
            raise ValidationError({"status": [f"Pick session is {self.status}, no further actions are accepted"]})

    def _checked_item(self, product_id: str, expected_version: int | None) -> PickItem:
        self._assert_active()
        item = self.item_for(product_id)
        if expected_version is not None and item.version != expected_version:
            raise StalePickItemError(
                {"version": [f"Item `{product_id}` is at version {item.version}, not {expected_version}"]}
            )
        return item

    def _shortage_entry(self, product_id: str) -> ShortageEntry | None:
        return next((s for s in (self.shortages or []) if str(s.product_id) == str(product_id)), None)

    def report_done(self, product_id: str, expected_version: int | None = None) -> None:
        """Confirm the full consolidated quantity was found.

        Any shortage previously reported for the product is discarded: done
        always means "treat as fully available".
        """
        item = self._checked_item(product_id, expected_version)

        entry = self._shortage_entry(product_id)
        if entry is not None:
            self.remove_shortages(entry)

        now = datetime.now(UTC)
        item.status = PickItemStatus.DONE.value
        item.version = item.version + 1
        self.raise_(
            PickItemConfirmed(
                session_id=str(self.id),
                product_id=str(product_id),
                total_qty=item.total_qty,
                shortage_cleared=entry is not None,
                confirmed_at=now,
            )
        )

    def report_shortage(self, product_id: str, actual_qty, expected_version: int | None = None) -> None:
        """Record the quantity actually found, replacing any earlier report."""
        item = self._checked_item(product_id, expected_version)
        qty = validate_quantity(actual_qty)

        entry = self._shortage_entry(product_id)
        if entry is None:
            self.add_shortages(ShortageEntry(product_id=str(product_id), available_qty=qty))
        else:
            entry.available_qty = qty

        now = datetime.now(UTC)
        item.status = PickItemStatus.SHORTAGE.value
        item.version = item.version + 1
        self.raise_(
            ShortageReported(
                session_id=str(self.id),
                product_id=str(product_id),
                expected_qty=item.total_qty,
                actual_qty=qty,
                reported_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Packing
    # -------------------------------------------------------------------
    def packing_manifest(self, orders: list):
        """Allocate the current ledger over the batch's orders, fresh every call."""
        from picking.session.allocation import allocate

        return allocate(self.order_in_sequence(orders), self.ledger)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def finish(self, orders: list, elapsed_seconds: int = 0):
        """Close the run and publish the final manifest."""
        self._assert_active()
        manifest = self.packing_manifest(orders)

        now = datetime.now(UTC)
        self.status = PickSessionStatus.FINISHED.value
        self.ended_at = now
        self.raise_(
            PickSessionFinished(
                session_id=str(self.id),
                picker_name=self.picker_name,
                batch_id=self.batch_id,
                elapsed_seconds=elapsed_seconds,
                shortage_line_count=len(manifest.shortage_lines),
                manifest=json.dumps(manifest.to_dict()),
                finished_at=now,
            )
        )
        return manifest

    def abandon(self) -> None:
        """Reset the run without producing a manifest."""
        self._assert_active()
        now = datetime.now(UTC)
        self.status = PickSessionStatus.ABANDONED.value
        self.ended_at = now
        self.raise_(
            PickSessionAbandoned(
                session_id=str(self.id),
                picker_name=self.picker_name,
                abandoned_at=now,
            )
        )
