"""In-memory product catalog for development and tests."""

from picking.catalog.port import ProductCatalog, ProductInfo


def demo_products() -> list[ProductInfo]:
    return [
        ProductInfo(product_id="TOM-001", name="Tomate Chonto", sku="TOM-001"),
        ProductInfo(product_id="CEB-002", name="Cebolla Blanca", sku="CEB-002"),
        ProductInfo(product_id="LIM-003", name="Limon Tahiti", sku="LIM-003"),
    ]


class InMemoryCatalog(ProductCatalog):
    def __init__(self):
        self._products: dict[str, ProductInfo] = {}

    def register(self, product: ProductInfo) -> None:
        self._products[product.product_id] = product

    def clear(self) -> None:
        self._products.clear()

    def get_product(self, product_id: str) -> ProductInfo | None:
        return self._products.get(product_id)
