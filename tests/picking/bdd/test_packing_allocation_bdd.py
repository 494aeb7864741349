"""BDD tests for packing allocation under shortage."""

from pytest_bdd import parsers, scenarios, when

scenarios("features/packing_allocation.feature")


@when(parsers.cfparse('the picker reports {qty:g} kg found of "{product_id}"'), target_fixture="session")
def report_found(session, qty, product_id):
    session.report_shortage(product_id, qty)
    return session


@when(parsers.cfparse('the picker marks "{product_id}" as done'), target_fixture="session")
def mark_done(session, product_id):
    session.report_done(product_id)
    return session
