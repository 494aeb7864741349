"""Packing view — per-order allocation of whatever was actually picked.

The view is recomputed from the open orders and the current shortage ledger
on every request, so a shortage corrected after the first look at the
packing screen is always reflected.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from picking.orders import get_order_source
from picking.session.manifest import PackingManifest
from picking.session.session import PickSession


def request_packing_view(session_id: str) -> PackingManifest:
    session = current_domain.repository_for(PickSession).get(session_id)
    if not session.is_active:
        raise ValidationError({"status": [f"Packing view is not available for a {session.status} session"]})

    orders = get_order_source().get_open_orders(session.batch_id)
    return session.packing_manifest(orders)
