# app/services/product_catalog.py
from typing import Any, Dict, List

from app.domain.schemas import Product
from app.utils.logging import get_logger

logger = get_logger(__name__)


PRODUCTS = {
    "1": {"product_id": "1", "name": "Laptop", "price": 999.99, "image": "💻"},
    "2": {"product_id": "2", "name": "Smartphone", "price": 699.99, "image": "📱"},
    "3": {"product_id": "3", "name": "Headphones", "price": 199.99, "image": "🎧"},
    "4": {"product_id": "4", "name": "Keyboard", "price": 149.99, "image": "⌨️"},
    "5": {"product_id": "5", "name": "Monitor", "price": 299.99, "image": "🖥️"},
    "6": {"product_id": "6", "name": "Mouse", "price": 49.99, "image": "🖱️"},
    "7": {"product_id": "7", "name": "Webcam", "price": 79.99, "image": "📹"},
    "8": {"product_id": "8", "name": "Speaker", "price": 129.99, "image": "🔊"},
}


class ProductCatalog:
    """
    Katalog produktow - dane referencyjne, nie dane uzytkownika.
    Tworzony raz przy starcie aplikacji i wstrzykiwany do CartService.
    """

    def __init__(self, products: Dict[str, Dict[str, Any]] | None = None):
        source = PRODUCTS if products is None else products
        self._products: Dict[str, Product] = {
            product_id: Product(**{**data, "product_id": product_id})
            for product_id, data in source.items()
        }

    @property
    def valid_product_ids(self) -> frozenset[str]:
        return frozenset(self._products)

    def is_valid_product_id(self, product_id: str) -> bool:
        return product_id in self._products

    def get_product(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def get_all_products(self) -> List[Product]:
        return list(self._products.values())

    def upsert(self, product_id: str, data: Dict[str, Any]) -> Product:
        #admin - dodanie albo nadpisanie produktu
        product = Product(**{**data, "product_id": product_id})
        self._products[product_id] = product
        logger.info(f"Catalog entry {product_id} upserted")
        return product
