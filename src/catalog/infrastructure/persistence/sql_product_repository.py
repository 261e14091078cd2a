"""SQLAlchemy-backed implementation of ProductRepository.

Rows are mapped onto ``ProductRecord`` and converted to the domain
``Product`` at the boundary, so callers never hold ORM instances.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal

from loguru import logger
from sqlalchemy import Integer, Numeric, String, Text, delete, event, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _on_sqlite_connect(dbapi_connection, connection_record) -> None:
    # pysqlite must not emit its own BEGIN; _on_sqlite_begin does it instead.
    dbapi_connection.isolation_level = None
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


def _on_sqlite_begin(connection) -> None:
    # Take the write lock up front so a read-modify-write cannot interleave.
    connection.exec_driver_sql("BEGIN IMMEDIATE")


class Base(DeclarativeBase):
    pass


class ProductRecord(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    stock: Mapped[int] = mapped_column(Integer, default=0)


class SqlProductRepository(ProductRepository):

    def __init__(self, engine: Engine) -> None:
        logger.info("Setting up product schema on {}", engine.url.render_as_string(hide_password=True))
        self._sqlite = engine.dialect.name == "sqlite"
        if self._sqlite and not event.contains(engine, "connect", _on_sqlite_connect):
            event.listen(engine, "connect", _on_sqlite_connect)
            event.listen(engine, "begin", _on_sqlite_begin)
            engine.dispose()
        Base.metadata.create_all(engine)
        self._session_factory = sessionmaker(engine, expire_on_commit=False)
        self._local = threading.local()

    # --- Unit of work ---------------------------------------------------------

    @contextmanager
    def atomic(self) -> Iterator[None]:
        if self._current_session() is not None:
            yield
            return

        with self._transaction() as session:
            self._local.session = session
            try:
                yield
            finally:
                self._local.session = None

    # --- ProductRepository interface ------------------------------------------

    def save(self, product: Product) -> Product:
        with self._session() as session:
            record = None
            if product.id is not None:
                record = session.get(ProductRecord, product.id)
            if record is None:
                record = ProductRecord(id=product.id)
                session.add(record)

            record.name = product.name
            record.description = product.description
            record.price = product.price
            record.stock = product.stock
            session.flush()

            product.id = record.id
        return product

    def find_all(self) -> list[Product]:
        return self._select(select(ProductRecord))

    def find_by_id(self, product_id: int) -> Product | None:
        with self._session() as session:
            # Inside a unit of work the row stays locked until it ends.
            record = session.get(
                ProductRecord,
                product_id,
                with_for_update=True if self._current_session() is not None else None,
            )
            return self._to_domain(record) if record is not None else None

    def find_by_name_containing(self, text: str) -> list[Product]:
        if self._sqlite:
            # SQLite lower() only folds ASCII.
            condition = func.casefold(ProductRecord.name, type_=String).contains(
                text.casefold(), autoescape=True
            )
        else:
            condition = ProductRecord.name.icontains(text, autoescape=True)
        return self._select(select(ProductRecord).where(condition))

    def find_by_stock_greater_than(self, stock: int) -> list[Product]:
        return self._select(select(ProductRecord).where(ProductRecord.stock > stock))

    def delete(self, product: Product) -> None:
        with self._session() as session:
            record = session.get(ProductRecord, product.id)
            if record is not None:
                session.delete(record)
                session.flush()

    def delete_all(self) -> None:
        with self._session() as session:
            session.execute(delete(ProductRecord))

    # --- Internal helpers -----------------------------------------------------

    def _select(self, statement) -> list[Product]:
        with self._session() as session:
            records = session.scalars(statement.order_by(ProductRecord.id)).all()
            return [self._to_domain(record) for record in records]

    @staticmethod
    def _to_domain(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            description=record.description,
            price=record.price,
            stock=record.stock,
        )

    def _current_session(self) -> Session | None:
        return getattr(self._local, "session", None)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Join the open unit of work, or run a short transaction of our own."""
        current = self._current_session()
        if current is not None:
            yield current
            return
        with self._transaction() as session:
            yield session

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Product transaction rolled back: {}: {}", type(exc).__name__, exc)
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
