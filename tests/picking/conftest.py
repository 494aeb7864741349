import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def picking_bed():
    from picking.domain import picking

    bed = DomainFixture(picking)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(picking_bed):
    with picking_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fresh order source, catalog and clocks for every test; clear data after."""
    from picking.catalog import reset_catalog
    from picking.orders import reset_order_source
    from picking.session.clock import reset_session_clocks

    reset_order_source()
    reset_catalog()
    reset_session_clocks()

    yield

    reset_session_clocks()

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()
