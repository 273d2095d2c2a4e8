import logging
import threading
import uuid
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import NotFoundError, ValidationError
from .models import Product

# This file holds the in-memory product collection and its lock.

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "in_stock": True,
    },
    {
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "in_stock": True,
    },
    {
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "in_stock": False,
    },
]

_MUTABLE_FIELDS = frozenset(name for name in Product.model_fields if name != "id")


class ProductStore:
    """
    Owns the ordered list of products. Every read and write goes through
    these methods, each of which holds the store lock for its duration.
    """

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None):
        self._products: List[Product] = []
        self._lock = threading.RLock()
        if records:
            self.seed(records)

    def insert(self, fields: Dict[str, Any]) -> Product:
        """Append a new product and return it with its generated id."""
        data = {k: v for k, v in fields.items() if k != "id"}
        product = Product(id=uuid.uuid4().hex, **data)
        with self._lock:
            self._products.append(product)
        logger.debug("inserted product %s", product.id)
        return product

    def find(self, product_id: str) -> Optional[Product]:
        with self._lock:
            for p in self._products:
                if p.id == product_id:
                    return p
        return None

    def find_index(self, product_id: str) -> Optional[int]:
        with self._lock:
            for i, p in enumerate(self._products):
                if p.id == product_id:
                    return i
        return None

    def replace(self, product_id: str, fields: Dict[str, Any]) -> Product:
        """
        Merge `fields` over the stored product, keeping its id and position.
        Raises NotFoundError if the id is absent, ValidationError for keys
        outside the product schema.
        """
        update = {k: v for k, v in fields.items() if k != "id"}

        with self._lock:
            index = self.find_index(product_id)
            if index is None:
                raise NotFoundError(product_id)
            unknown = set(update) - _MUTABLE_FIELDS
            if unknown:
                raise ValidationError(sorted(unknown))
            merged = self._products[index].model_dump()
            merged.update(update)
            merged["id"] = product_id
            product = Product(**merged)
            self._products[index] = product
        logger.debug("replaced product %s", product_id)
        return product

    def remove(self, product_id: str) -> Product:
        """Delete by id. Removing an id twice raises NotFoundError the second time."""
        with self._lock:
            index = self.find_index(product_id)
            if index is None:
                raise NotFoundError(product_id)
            product = self._products.pop(index)
        logger.debug("removed product %s", product_id)
        return product

    def snapshot(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def seed(self, records: Iterable[Dict[str, Any]]) -> None:
        for record in records:
            self.insert(record)

    def clear(self) -> None:
        with self._lock:
            self._products.clear()
