"""Integration tests for the ProductStore use cases."""

from decimal import Decimal

import pytest

from catalog.application.product_store import ProductStore
from catalog.domain.exceptions import DomainException, ProductNotFoundError, ValidationError
from catalog.domain.model.product import Product
from tests.fakes import FakeProductRepository


def _setup():
    repo = FakeProductRepository(
        [
            Product(name="Widget Pro 2000", description="Flagship", price="99.90", stock=5),
            Product(name="Gadget", price="25.00", stock=12),
            Product(name="widget mini", price="9.99", stock=0),
        ]
    )
    return ProductStore(repo), repo


class TestCreate:

    def test_assigns_id_and_persists(self):
        store = ProductStore(FakeProductRepository())
        created = store.create(
            Product(name="Pen", description="Blue", price=Decimal("1.50"), stock=10)
        )

        assert created.id == 1
        fetched = store.get_by_id(created.id)
        assert fetched == Product(
            id=1, name="Pen", description="Blue", price=Decimal("1.50"), stock=10
        )

    def test_ids_are_unique(self):
        store = ProductStore(FakeProductRepository())
        ids = {store.create(Product(name=f"P{i}", price="1")).id for i in range(5)}
        assert len(ids) == 5


    def test_price_finer_than_cents_never_reaches_storage(self):
        store = ProductStore(FakeProductRepository())

        with pytest.raises(ValidationError):
            store.create(Product(name="Pen", price="1.505"))

        assert store.list_all() == []

    def test_returned_product_matches_stored_product(self):
        store = ProductStore(FakeProductRepository())
        created = store.create(Product(name="Pen", price="1.50", stock=10))

        assert store.get_by_id(created.id) == created


class TestQueries:

    def test_list_all(self):
        store, _ = _setup()
        assert [p.name for p in store.list_all()] == ["Widget Pro 2000", "Gadget", "widget mini"]

    def test_list_all_is_not_cached(self):
        store, repo = _setup()
        store.list_all()
        repo.save(Product(name="Late", price="1"))
        assert len(store.list_all()) == 4

    def test_get_by_id_missing_returns_none(self):
        store, _ = _setup()
        assert store.get_by_id(999) is None

    def test_search_is_case_insensitive_substring(self):
        store, _ = _setup()
        assert [p.name for p in store.search_by_name("PRO")] == ["Widget Pro 2000"]
        assert [p.name for p in store.search_by_name("wIdGeT")] == ["Widget Pro 2000", "widget mini"]

    def test_search_empty_matches_all(self):
        store, _ = _setup()
        assert len(store.search_by_name("")) == 3

    def test_search_no_match(self):
        store, _ = _setup()
        assert store.search_by_name("sprocket") == []

    def test_filter_by_stock_is_strict(self):
        store, _ = _setup()
        assert [p.name for p in store.filter_by_stock_above(5)] == ["Gadget"]
        assert [p.name for p in store.filter_by_stock_above(4)] == ["Widget Pro 2000", "Gadget"]
        assert store.filter_by_stock_above(12) == []

    def test_filter_by_negative_threshold_includes_zero_stock(self):
        store, _ = _setup()
        assert len(store.filter_by_stock_above(-1)) == 3


class TestUpdate:

    def test_overwrites_all_fields(self):
        store, _ = _setup()
        updated = store.update(
            2, Product(name="Gadget XL", description="Bigger", price="30.00", stock=4)
        )

        assert updated.id == 2
        assert store.get_by_id(2) == Product(
            id=2, name="Gadget XL", description="Bigger", price=Decimal("30.00"), stock=4
        )

    def test_empty_payload_is_not_a_partial_update(self):
        store, _ = _setup()
        store.update(1, Product(name="", price="0"))

        product = store.get_by_id(1)
        assert product.name == ""
        assert product.description == ""
        assert product.price == Decimal("0")
        assert product.stock == 0

    def test_payload_id_is_ignored(self):
        store, _ = _setup()
        updated = store.update(1, Product(id=3, name="Renamed", price="1"))

        assert updated.id == 1
        assert store.get_by_id(3).name == "widget mini"

    def test_missing_id_raises_not_found(self):
        store, repo = _setup()

        with pytest.raises(ProductNotFoundError, match="not found") as exc_info:
            store.update(999, Product(name="Ghost", price="1"))

        assert exc_info.value.product_id == 999
        assert repo.find_by_id(999) is None


class TestDelete:

    def test_removes_product(self):
        store, _ = _setup()
        store.delete(2)

        assert store.get_by_id(2) is None
        assert [p.id for p in store.list_all()] == [1, 3]

    def test_missing_id_raises_not_found(self):
        store, _ = _setup()

        with pytest.raises(ProductNotFoundError):
            store.delete(999)

        assert len(store.list_all()) == 3

    def test_delete_twice_raises_not_found(self):
        store, _ = _setup()
        store.delete(1)

        with pytest.raises(ProductNotFoundError):
            store.delete(1)

    def test_delete_all_empties_the_store(self):
        store, _ = _setup()
        store.delete_all()
        assert store.list_all() == []

    def test_delete_all_on_empty_store(self):
        store = ProductStore(FakeProductRepository())
        store.delete_all()
        assert store.list_all() == []


class TestPenLifecycle:

    def test_full_scenario(self):
        store = ProductStore(FakeProductRepository())

        pen = store.create(Product(name="Pen", price=1.50, stock=10))
        assert pen.id == 1

        assert [p.name for p in store.filter_by_stock_above(5)] == ["Pen"]
        assert store.filter_by_stock_above(10) == []

        updated = store.update(1, Product(name="Gel Pen", price=2.00, stock=0))
        assert updated.id == 1
        assert updated.name == "Gel Pen"
        assert updated.stock == 0

        store.delete(1)
        assert store.get_by_id(1) is None


class _UnreachableStorage(FakeProductRepository):

    def save(self, product: Product) -> Product:
        raise OSError("disk full")

    def find_by_id(self, product_id: int) -> Product | None:
        raise OSError("disk unreadable")


class TestStorageFailures:

    def test_create_propagates_storage_error(self):
        store = ProductStore(_UnreachableStorage())

        with pytest.raises(OSError, match="disk full") as exc_info:
            store.create(Product(name="Pen", price="1.50"))

        assert not isinstance(exc_info.value, DomainException)

    def test_update_propagates_storage_error(self):
        store = ProductStore(_UnreachableStorage())

        with pytest.raises(OSError, match="disk unreadable") as exc_info:
            store.update(1, Product(name="Gel Pen", price="2.00"))

        assert not isinstance(exc_info.value, DomainException)

    def test_delete_propagates_storage_error(self):
        store = ProductStore(_UnreachableStorage())

        with pytest.raises(OSError):
            store.delete(1)

    def test_get_by_id_propagates_storage_error(self):
        store = ProductStore(_UnreachableStorage())

        with pytest.raises(OSError):
            store.get_by_id(1)
