"""FastAPI routes for the Picking domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from picking.api.schemas import (
    PackedOrderResponse,
    PackingLineResponse,
    PackingManifestResponse,
    PickItemResponse,
    PickListResponse,
    PickSessionIdResponse,
    ReportItemDoneRequest,
    ReportShortageRequest,
    StartPickSessionRequest,
    StatusResponse,
)
from picking.catalog import get_catalog
from picking.session.clock import get_session_clocks
from picking.session.finishing import AbandonPickSession, FinishPickSession
from picking.session.packing import request_packing_view
from picking.session.reporting import ReportItemDone, ReportShortage
from picking.session.session import PickSession
from picking.session.starting import StartPickSession

# ---------------------------------------------------------------------------
# Pick Session Router
# ---------------------------------------------------------------------------
pick_session_router = APIRouter(prefix="/pick-sessions", tags=["pick-sessions"])


def _display_name(product_id: str) -> tuple[str, str | None, str | None]:
    product = get_catalog().get_product(product_id)
    if product is None:
        return product_id, None, None
    return product.name, product.sku, product.image_url


def _item_response(item, ledger) -> PickItemResponse:
    name, sku, image_url = _display_name(str(item.product_id))
    return PickItemResponse(
        product_id=str(item.product_id),
        name=name,
        sku=sku,
        image_url=image_url,
        total_qty=item.total_qty,
        unit=item.unit,
        status=item.status,
        version=item.version,
        reported_qty=ledger.get(str(item.product_id)),
    )


@pick_session_router.post("", status_code=201, response_model=PickSessionIdResponse)
async def start_pick_session(body: StartPickSessionRequest) -> PickSessionIdResponse:
    """Start a picking run for a picker over a batch of open orders."""
    command = StartPickSession(picker_name=body.picker_name, batch_id=body.batch_id)
    session_id = current_domain.process(command, asynchronous=False)
    session = current_domain.repository_for(PickSession).get(session_id)
    return PickSessionIdResponse(
        session_id=session_id,
        item_count=len(session.items),
        nothing_to_pick=session.nothing_to_pick,
    )


@pick_session_router.get("/{session_id}", response_model=PickListResponse)
async def get_pick_list(session_id: str) -> PickListResponse:
    """The consolidated pick list, with the picker's pending queue."""
    session = current_domain.repository_for(PickSession).get(session_id)
    clock = get_session_clocks().get(str(session.id))
    ledger = session.ledger
    return PickListResponse(
        session_id=str(session.id),
        picker_name=session.picker_name,
        batch_id=session.batch_id,
        status=session.status,
        elapsed_seconds=clock.elapsed_seconds if clock else 0,
        timer=clock.display if clock else "00:00",
        nothing_to_pick=session.nothing_to_pick,
        all_picked=session.all_picked,
        items=[_item_response(item, ledger) for item in session.items],
        pending=[_item_response(item, ledger) for item in session.pending_items],
    )


@pick_session_router.put("/{session_id}/items/{product_id}/done", response_model=StatusResponse)
async def report_item_done(session_id: str, product_id: str, body: ReportItemDoneRequest | None = None) -> StatusResponse:
    """Confirm the full quantity of a product was picked."""
    command = ReportItemDone(
        session_id=session_id,
        product_id=product_id,
        expected_version=body.expected_version if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="item_done")


@pick_session_router.put("/{session_id}/items/{product_id}/shortage", response_model=StatusResponse)
async def report_shortage(session_id: str, product_id: str, body: ReportShortageRequest) -> StatusResponse:
    """Report the quantity of a product actually found."""
    command = ReportShortage(
        session_id=session_id,
        product_id=product_id,
        actual_qty=body.actual_qty,
        expected_version=body.expected_version,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="shortage_reported")


@pick_session_router.get("/{session_id}/packing", response_model=PackingManifestResponse)
async def get_packing_view(session_id: str) -> PackingManifestResponse:
    """Per-order allocation, recomputed from the current shortage reports."""
    manifest = request_packing_view(session_id)
    return PackingManifestResponse(
        session_id=session_id,
        orders=[
            PackedOrderResponse(
                order_id=order.order_id,
                client=order.client,
                delivery_time=order.delivery_time,
                has_shortage=order.has_shortage,
                lines=[
                    PackingLineResponse(
                        product_id=line.product_id,
                        name=_display_name(line.product_id)[0],
                        unit=line.unit,
                        requested_qty=line.requested_qty,
                        allocated_qty=line.allocated_qty,
                        has_shortage=line.has_shortage,
                        is_cut=line.is_cut,
                        is_out_of_stock=line.is_out_of_stock,
                    )
                    for line in order.lines
                ],
            )
            for order in manifest.orders
        ],
    )


@pick_session_router.put("/{session_id}/finish", response_model=StatusResponse)
async def finish_pick_session(session_id: str) -> StatusResponse:
    """Finish the run and publish the final packing manifest."""
    current_domain.process(FinishPickSession(session_id=session_id), asynchronous=False)
    return StatusResponse(status="finished")


@pick_session_router.put("/{session_id}/abandon", response_model=StatusResponse)
async def abandon_pick_session(session_id: str) -> StatusResponse:
    """Abandon the run without a manifest."""
    current_domain.process(AbandonPickSession(session_id=session_id), asynchronous=False)
    return StatusResponse(status="abandoned")
