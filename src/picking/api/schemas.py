"""Pydantic API schemas for the Picking domain.

These are the external API contracts — separate from domain commands.
The API layer translates between these schemas and domain commands.
"""

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class StartPickSessionRequest(BaseModel):
    picker_name: str
    batch_id: str


class ReportItemDoneRequest(BaseModel):
    expected_version: int | None = None


class ReportShortageRequest(BaseModel):
    actual_qty: float | None = None
    expected_version: int | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class PickSessionIdResponse(BaseModel):
    session_id: str
    item_count: int
    nothing_to_pick: bool


class StatusResponse(BaseModel):
    status: str


class PickItemResponse(BaseModel):
    product_id: str
    name: str
    sku: str | None = None
    image_url: str | None = None
    total_qty: float
    unit: str | None = None
    status: str
    version: int
    reported_qty: float | None = None


class PickListResponse(BaseModel):
    session_id: str
    picker_name: str
    batch_id: str
    status: str
    elapsed_seconds: int
    timer: str
    nothing_to_pick: bool
    all_picked: bool
    items: list[PickItemResponse]
    pending: list[PickItemResponse]


class PackingLineResponse(BaseModel):
    product_id: str
    name: str
    unit: str | None = None
    requested_qty: float
    allocated_qty: float
    has_shortage: bool
    is_cut: bool
    is_out_of_stock: bool


class PackedOrderResponse(BaseModel):
    order_id: str
    client: str
    delivery_time: str | None = None
    has_shortage: bool
    lines: list[PackingLineResponse]


class PackingManifestResponse(BaseModel):
    session_id: str
    orders: list[PackedOrderResponse]
