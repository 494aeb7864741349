"""Product catalog abstraction — display metadata for the picker's pick list."""

import os

_catalog_instance = None


def get_catalog():
    """Return the configured product catalog (singleton).

    Uses InMemoryCatalog by default. Configure via the PRODUCT_CATALOG
    environment variable.
    """
    global _catalog_instance
    if _catalog_instance is None:
        adapter = os.environ.get("PRODUCT_CATALOG", "memory")
        if adapter == "memory":
            from picking.catalog.memory_catalog import InMemoryCatalog

            _catalog_instance = InMemoryCatalog()
        else:
            raise ValueError(f"Unknown product catalog: {adapter}")
    return _catalog_instance


def reset_catalog():
    """Reset the catalog singleton (useful for testing)."""
    global _catalog_instance
    _catalog_instance = None
