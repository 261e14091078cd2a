"""Application service: the Product store.

Each public method is one use case and runs as a single unit of work
against the repository. Storage errors are not caught here.
"""

from __future__ import annotations

from loguru import logger

from catalog.domain.exceptions import ProductNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


class ProductStore:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    # --- Commands -------------------------------------------------------------

    def create(self, product: Product) -> Product:
        """Persist a new product and return it with its assigned ID."""
        with self._product_repo.atomic():
            created = self._product_repo.save(product)
        logger.info("Created product {}", created.id)
        return created

    def update(self, product_id: int, details: Product) -> Product:
        """Overwrite name, description, price and stock of an existing product.

        All four fields are taken from ``details`` as given, including
        empty or zero values. ``details.id`` is ignored.
        """
        with self._product_repo.atomic():
            product = self._require(product_id)
            product.overwrite_with(details)
            updated = self._product_repo.save(product)
        logger.info("Updated product {}", product_id)
        return updated

    def delete(self, product_id: int) -> None:
        with self._product_repo.atomic():
            product = self._require(product_id)
            self._product_repo.delete(product)
        logger.info("Deleted product {}", product_id)

    def delete_all(self) -> None:
        """Remove every product. There is no undo."""
        with self._product_repo.atomic():
            self._product_repo.delete_all()
        logger.info("Deleted all products")

    # --- Queries --------------------------------------------------------------

    def list_all(self) -> list[Product]:
        with self._product_repo.atomic():
            return self._product_repo.find_all()

    def get_by_id(self, product_id: int) -> Product | None:
        """Return the product, or None if there is none with that ID."""
        with self._product_repo.atomic():
            product = self._product_repo.find_by_id(product_id)
        if product is None:
            logger.debug("No product with ID {}", product_id)
        return product

    def search_by_name(self, text: str) -> list[Product]:
        """Case-insensitive substring match on the name. An empty string matches all."""
        with self._product_repo.atomic():
            return self._product_repo.find_by_name_containing(text)

    def filter_by_stock_above(self, threshold: int) -> list[Product]:
        """Products with stock strictly greater than ``threshold``."""
        with self._product_repo.atomic():
            return self._product_repo.find_by_stock_greater_than(threshold)

    # --- Internal helpers -----------------------------------------------------

    def _require(self, product_id: int) -> Product:
        product = self._product_repo.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product
