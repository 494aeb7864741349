"""Shortage ledger — what the picker actually found, per product.

An entry exists only for products the picker reported short. Absence means
"no shortage reported, assume the full quantity is available"; an explicit
zero means "reported, and nothing is available". Reports overwrite, they
never accumulate.
"""


class ShortageLedger:
    """Mapping of product id to last reported available quantity."""

    def __init__(self, entries: dict[str, float] | None = None):
        self._entries: dict[str, float] = dict(entries or {})

    @classmethod
    def from_entries(cls, entries) -> "ShortageLedger":
        """Build a ledger from ShortageEntry-like objects."""
        return cls({str(e.product_id): e.available_qty for e in entries or []})

    def set(self, product_id: str, qty: float) -> None:
        self._entries[product_id] = qty

    def clear(self, product_id: str) -> None:
        self._entries.pop(product_id, None)

    def get(self, product_id: str) -> float | None:
        return self._entries.get(product_id)

    def as_dict(self) -> dict[str, float]:
        return dict(self._entries)

    def __contains__(self, product_id) -> bool:
        return product_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"ShortageLedger({self._entries!r})"
