"""Picking bounded context — Batch Picking and Partial-Fulfillment Packing.

Consolidates the open orders of a warehouse run into one pick per product,
tracks the picker's progress and shortage reports, and rebuilds per-order
packing allocations from the reported availability. Uses CQRS because the
pick list and packing manifest are derived views recomputed on request.
"""

from protean.domain import Domain

# Domain Composition Root
picking = Domain(name="picking")
