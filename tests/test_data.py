# tests/test_data.py

"""Tests for the database maintenance command."""

from sqlalchemy.exc import OperationalError
from typer.testing import CliRunner

from product_api import data
from product_api.store import ProductStore

runner = CliRunner()


def test_clear_empties_the_catalog(db_session):
    ProductStore(db_session).create({"name": "Mouse", "price": 10})
    db_session.close()

    result = runner.invoke(data.app, ["--clear"])
    assert result.exit_code == 0
    assert "Database cleared successfully." in result.output
    assert ProductStore(db_session).find_all() == []


def test_without_flag_does_nothing(db_session):
    ProductStore(db_session).create({"name": "Mouse", "price": 10})

    result = runner.invoke(data.app, [])
    assert result.exit_code == 0
    assert len(ProductStore(db_session).find_all()) == 1


def test_clear_failure_exits_non_zero(monkeypatch):
    def broken_clear():
        raise OperationalError("DROP TABLE products", {}, Exception("database is down"))

    monkeypatch.setattr(data, "clear_database", broken_clear)

    result = runner.invoke(data.app, ["--clear"])
    assert result.exit_code == 1
