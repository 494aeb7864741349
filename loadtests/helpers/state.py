"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own pick session; nothing is shared
between simulated pickers.
"""

from dataclasses import dataclass, field


@dataclass
class PickSessionState:
    """Tracks one simulated picker's run over a batch."""

    session_id: str | None = None
    batch_id: str | None = None
    items: list[dict] = field(default_factory=list)
    shortages_reported: int = 0
    current_status: str = "Active"
