"""Catalog port — product identity and display metadata.

Display data never influences allocation; a product missing from the
catalog is still picked and packed, it is just shown by its id.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductInfo:
    """How a product is presented to the picker."""

    product_id: str
    name: str
    sku: str | None = None
    image_url: str | None = None


class ProductCatalog(ABC):
    """Abstract interface for catalog collaborators."""

    @abstractmethod
    def get_product(self, product_id: str) -> ProductInfo | None:
        """Return display metadata for a product, or None when unknown."""
        ...
