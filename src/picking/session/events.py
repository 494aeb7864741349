"""Picking domain events — immutable facts about pick session state changes.

All events are past tense and carry enough data for downstream
packing, dispatch and notification collaborators.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from picking.domain import picking


@picking.event(part_of="PickSession")
class PickSessionStarted:
    """A picker started a run over a batch of open orders."""

    session_id = Identifier(required=True)
    picker_name = String(required=True)
    batch_id = String(required=True)
    order_count = Integer(required=True)
    item_count = Integer(required=True)
    started_at = DateTime(required=True)


@picking.event(part_of="PickSession")
class PickItemConfirmed:
    """The picker found the full consolidated quantity of a product.

    ``shortage_cleared`` is set when the confirmation erased an earlier
    shortage report for the product.
    """

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    total_qty = Float(required=True)
    shortage_cleared = Boolean(default=False)
    confirmed_at = DateTime(required=True)


@picking.event(part_of="PickSession")
class ShortageReported:
    """The picker found less than the consolidated quantity of a product."""

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    expected_qty = Float(required=True)
    actual_qty = Float(required=True)
    reported_at = DateTime(required=True)


@picking.event(part_of="PickSession")
class PickSessionFinished:
    """Picking and packing are over; the final manifest goes downstream."""

    session_id = Identifier(required=True)
    picker_name = String(required=True)
    batch_id = String(required=True)
    elapsed_seconds = Integer(default=0)
    shortage_line_count = Integer(default=0)
    manifest = Text(required=True)  # JSON of PackingManifest.to_dict()
    finished_at = DateTime(required=True)


@picking.event(part_of="PickSession")
class PickSessionAbandoned:
    """The run was reset before finishing; no manifest is produced."""

    session_id = Identifier(required=True)
    picker_name = String(required=True)
    abandoned_at = DateTime(required=True)
