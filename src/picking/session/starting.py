"""Pick session start — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from picking.domain import picking
from picking.orders import get_order_source
from picking.session.clock import get_session_clocks
from picking.session.session import PickSession, PickSessionStatus
from picking.utils.logging import get_logger

logger = get_logger(__name__)


@picking.command(part_of="PickSession")
class StartPickSession:
    """Start a picker's run over the open orders of a batch."""

    picker_name = String(required=True, max_length=100)
    batch_id = String(required=True, max_length=100)


@picking.command_handler(part_of=PickSession)
class StartPickSessionHandler:
    @handle(StartPickSession)
    def start_pick_session(self, command):
        repo = current_domain.repository_for(PickSession)

        # One active session per picker
        active = repo._dao.query.filter(
            picker_name=command.picker_name.strip(),
            status=PickSessionStatus.ACTIVE.value,
        ).all()
        if active.items:
            raise ValidationError({"picker_name": [f"Picker {command.picker_name} already has an active session"]})

        orders = get_order_source().get_open_orders(command.batch_id)
        session = PickSession.start(
            picker_name=command.picker_name,
            batch_id=command.batch_id,
            orders=orders,
        )

        session_id = str(session.id)

        if session.nothing_to_pick:
            # Closed on the spot: no clock, and the picker stays free to start again
            session.finish(orders)
            repo.add(session)
            logger.info("Pick session closed, nothing to pick", session_id=session_id, batch_id=command.batch_id)
            return session_id

        repo.add(session)
        get_session_clocks().start(session_id)
        logger.info(
            "Pick session started",
            session_id=session_id,
            picker_name=session.picker_name,
            batch_id=command.batch_id,
            order_count=len(orders),
            item_count=len(session.items),
        )
        return session_id
