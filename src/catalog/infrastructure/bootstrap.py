"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Configuration comes from the environment:

``CATALOG_DATABASE_URL``
    SQLAlchemy URL. When set, products are stored in that database.
``CATALOG_DATA_DIR``
    Directory for the JSON store used when no database URL is set.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger
from sqlalchemy import create_engine

from catalog.application.product_store import ProductStore
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)

DATABASE_URL_ENV = "CATALOG_DATABASE_URL"
DATA_DIR_ENV = "CATALOG_DATA_DIR"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else _DEFAULT_DATA_DIR


def product_repository() -> ProductRepository:
    database_url = os.environ.get(DATABASE_URL_ENV)
    if database_url:
        logger.debug("Using SQL product repository")
        return SqlProductRepository(create_engine(database_url))

    file_path = data_dir() / "products.json"
    logger.debug("Using JSON product repository at {}", file_path)
    return JsonProductRepository(file_path)


def product_store() -> ProductStore:
    return ProductStore(product_repo=product_repository())
