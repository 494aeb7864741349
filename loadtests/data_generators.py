"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the pick-session Pydantic request
schemas. Shortage quantities are drawn below the consolidated total so
that packing allocation actually has to ration something.
"""

import random
import uuid

from faker import Faker

fake = Faker()

DEMO_BATCH_ID = "demo"


def picker_name() -> str:
    """Unique picker names: one active session per picker is enforced."""
    return f"{fake.first_name()[:40]}-{uuid.uuid4().hex[:6]}"


def start_session_data(batch_id: str = DEMO_BATCH_ID) -> dict:
    """Generate a StartPickSessionRequest payload."""
    return {"picker_name": picker_name(), "batch_id": batch_id}


def shortage_data(total_qty: float, expected_version: int | None = None) -> dict:
    """Generate a ReportShortageRequest payload for an item of ``total_qty``.

    Mostly partial finds, sometimes nothing at all.
    """
    if random.random() < 0.2:
        actual = 0
    else:
        actual = round(random.uniform(0, total_qty), 1)
    payload = {"actual_qty": actual}
    if expected_version is not None:
        payload["expected_version"] = expected_version
    return payload


def invalid_shortage_data() -> dict:
    """A payload the domain must reject with 400."""
    return {"actual_qty": random.choice([-1, -0.5, None])}
