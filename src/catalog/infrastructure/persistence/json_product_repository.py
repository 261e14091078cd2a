"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path

from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    @contextmanager
    def atomic(self) -> Iterator[None]:
        # Serializes units of work within this process only.
        with self._lock:
            yield

    def save(self, product: Product) -> Product:
        with self._lock:
            raw = self._load_raw()

            if product.id is None:
                product.id = max((item["id"] for item in raw), default=0) + 1

            # Upsert: replace if exists, otherwise append
            for i, item in enumerate(raw):
                if item["id"] == product.id:
                    raw[i] = self._to_raw(product)
                    break
            else:
                raw.append(self._to_raw(product))

            self._persist_raw(raw)
        return product

    def find_all(self) -> list[Product]:
        return [self._to_domain(item) for item in self._sorted_raw()]

    def find_by_id(self, product_id: int) -> Product | None:
        for item in self._load_raw():
            if item["id"] == product_id:
                return self._to_domain(item)
        return None

    def find_by_name_containing(self, text: str) -> list[Product]:
        needle = text.casefold()
        return [
            self._to_domain(item)
            for item in self._sorted_raw()
            if needle in item["name"].casefold()
        ]

    def find_by_stock_greater_than(self, stock: int) -> list[Product]:
        return [
            self._to_domain(item)
            for item in self._sorted_raw()
            if item["stock"] > stock
        ]

    def delete(self, product: Product) -> None:
        with self._lock:
            raw = self._load_raw()
            self._persist_raw([item for item in raw if item["id"] != product.id])

    def delete_all(self) -> None:
        with self._lock:
            self._persist_raw([])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price),
            "stock": product.stock,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=Decimal(raw["price"]),
            stock=raw.get("stock", 0),
        )

    def _sorted_raw(self) -> list[dict]:
        return sorted(self._load_raw(), key=lambda item: item["id"])

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, raw: list[dict]) -> None:
        self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
