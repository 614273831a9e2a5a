# tests/test_store.py

"""Tests for the ProductStore record store."""

import pytest
from sqlalchemy.exc import OperationalError

from product_api.exceptions import StoreError
from product_api.schemas import ProductResponse
from product_api.store import ProductStore


@pytest.fixture
def store(db_session):
    return ProductStore(db_session)


def test_create_returns_plain_record(store):
    product = store.create({"name": "Silla Gamer", "price": 250})
    assert isinstance(product, ProductResponse)
    assert product.id is not None
    assert product.name == "Silla Gamer"
    assert product.price == 250
    assert product.availability is True


def test_create_ignores_unknown_fields(store):
    product = store.create({"name": "Mouse", "price": 10, "id": 99, "stock": 4})
    assert product.id != 99


def test_find_all_orders_by_id(store):
    first = store.create({"name": "A", "price": 1})
    second = store.create({"name": "B", "price": 2})
    assert [p.id for p in store.find_all()] == [first.id, second.id]


def test_find_by_id_missing(store):
    assert store.find_by_id(2000) is None


def test_update_overwrites_fields(store):
    product = store.create({"name": "Mouse", "price": 10})
    updated = store.update(product.id, {"name": "Mouse Pro", "availability": False})
    assert updated.name == "Mouse Pro"
    assert updated.price == 10
    assert updated.availability is False
    assert store.find_by_id(product.id).availability is False


def test_update_missing_returns_none(store):
    assert store.update(2000, {"name": "Nope"}) is None


def test_delete(store):
    product = store.create({"name": "Mouse", "price": 10})
    assert store.delete(product.id) is True
    assert store.find_by_id(product.id) is None
    assert store.delete(product.id) is False


def test_database_failure_becomes_store_error(store, db_session, monkeypatch):
    rollbacks = []

    def broken_commit():
        raise OperationalError("UPDATE products", {}, Exception("database is down"))

    monkeypatch.setattr(db_session, "commit", broken_commit)
    monkeypatch.setattr(db_session, "rollback", lambda: rollbacks.append(True))

    with pytest.raises(StoreError):
        store.create({"name": "Mouse", "price": 10})
    assert rollbacks == [True]


def test_out_of_range_ids_are_absent(store):
    huge = 99999999999999999999
    assert store.find_by_id(huge) is None
    assert store.update(huge, {"name": "Nope"}) is None
    assert store.delete(huge) is False
    assert store.find_by_id(-huge) is None
