"""Pick session end — finish (publish the final manifest) or abandon."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from picking.domain import picking
from picking.orders import get_order_source
from picking.session.clock import get_session_clocks
from picking.session.session import PickSession
from picking.utils.logging import get_logger

logger = get_logger(__name__)


@picking.command(part_of="PickSession")
class FinishPickSession:
    """Close the run and hand the final packing manifest downstream."""

    session_id = Identifier(required=True)


@picking.command(part_of="PickSession")
class AbandonPickSession:
    """Reset the run without producing a manifest."""

    session_id = Identifier(required=True)


@picking.command_handler(part_of=PickSession)
class PickSessionEndHandler:
    @handle(FinishPickSession)
    def finish_pick_session(self, command):
        repo = current_domain.repository_for(PickSession)
        session = repo.get(command.session_id)
        orders = get_order_source().get_open_orders(session.batch_id)

        clocks = get_session_clocks()
        manifest = session.finish(orders, elapsed_seconds=clocks.elapsed(str(session.id)))
        repo.add(session)
        elapsed = clocks.stop(str(session.id))

        logger.info(
            "Pick session finished",
            session_id=str(session.id),
            picker_name=session.picker_name,
            elapsed_seconds=elapsed,
            shortage_lines=len(manifest.shortage_lines),
        )

    @handle(AbandonPickSession)
    def abandon_pick_session(self, command):
        repo = current_domain.repository_for(PickSession)
        session = repo.get(command.session_id)
        session.abandon()
        repo.add(session)
        get_session_clocks().stop(str(session.id))
        logger.info("Pick session abandoned", session_id=str(session.id), picker_name=session.picker_name)
