"""Order source abstraction — pluggable order-management integration."""

import os

_order_source_instance = None


def get_order_source():
    """Return the configured order source (singleton).

    Uses InMemoryOrderSource by default. Configure via the ORDER_SOURCE
    environment variable.
    """
    global _order_source_instance
    if _order_source_instance is None:
        adapter = os.environ.get("ORDER_SOURCE", "memory")
        if adapter == "memory":
            from picking.orders.memory_source import InMemoryOrderSource

            _order_source_instance = InMemoryOrderSource()
        else:
            raise ValueError(f"Unknown order source: {adapter}")
    return _order_source_instance


def reset_order_source():
    """Reset the order source singleton (useful for testing)."""
    global _order_source_instance
    _order_source_instance = None
