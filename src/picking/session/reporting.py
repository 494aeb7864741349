"""Pick reporting — the picker's item confirmations and shortage reports."""

from protean import handle
from protean.fields import Float, Identifier, Integer
from protean.utils.globals import current_domain

from picking.domain import picking
from picking.session.session import PickSession
from picking.utils.logging import get_logger, pick_context

logger = get_logger(__name__)


@picking.command(part_of="PickSession")
class ReportItemDone:
    """Confirm the full consolidated quantity of a product was picked."""

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    expected_version = Integer()


@picking.command(part_of="PickSession")
class ReportShortage:
    """Report the quantity of a product actually found on the shelf."""

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    actual_qty = Float()  # Validated by the aggregate; missing is rejected there
    expected_version = Integer()


@picking.command_handler(part_of=PickSession)
class PickReportingHandler:
    @handle(ReportItemDone)
    def report_item_done(self, command):
        with pick_context(command.session_id, product_id=str(command.product_id)):
            repo = current_domain.repository_for(PickSession)
            session = repo.get(command.session_id)
            had_shortage = str(command.product_id) in session.ledger
            session.report_done(command.product_id, expected_version=command.expected_version)
            repo.add(session)
            if had_shortage:
                logger.info("Item confirmed done, earlier shortage discarded")
            else:
                logger.debug("Item confirmed done")

    @handle(ReportShortage)
    def report_shortage(self, command):
        with pick_context(command.session_id, product_id=str(command.product_id)):
            repo = current_domain.repository_for(PickSession)
            session = repo.get(command.session_id)
            session.report_shortage(
                command.product_id,
                command.actual_qty,
                expected_version=command.expected_version,
            )
            repo.add(session)
            logger.info("Shortage reported", actual_qty=command.actual_qty)
