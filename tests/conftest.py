# tests/conftest.py

"""
Shared fixtures for the Products API test suite.
Tests run against an in-memory SQLite database unless DATABASE_URL points
elsewhere. Tables are dropped and recreated around every test.
"""

import logging
import os

# Must be set before product_api.db builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_CONNECT_MAX_RETRIES", "1")

import pytest
from fastapi.testclient import TestClient

from product_api.db import Base, SessionLocal, engine
from product_api.main import app

# Suppress noisy logs during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("product_api").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def clean_database():
    """Gives every test an empty products table."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="module")
def client():
    """
    Provides a TestClient for making HTTP requests to the FastAPI application.
    The TestClient runs the app's startup events.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_product(client):
    """Creates a product through the API and returns its JSON representation."""

    def _create(name="Monitor Curvo de 49 Pulgadas", price=300):
        response = client.post("/api/productos", json={"name": name, "price": price})
        assert response.status_code == 201
        return response.json()["data"]

    return _create
