"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, JSON, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new or updated product.

        A product without an ID is inserted and receives one; the same
        instance is returned.
        """

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every product, ordered by ID."""

    @abstractmethod
    def find_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_by_name_containing(self, text: str) -> list[Product]:
        """Return products whose name contains ``text``, ignoring case."""

    @abstractmethod
    def find_by_stock_greater_than(self, stock: int) -> list[Product]:
        """Return products with strictly more than ``stock`` units."""

    @abstractmethod
    def delete(self, product: Product) -> None:
        """Remove a persisted product."""

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every product."""

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Scope a unit of work; repository calls inside it form one transaction."""
        yield
