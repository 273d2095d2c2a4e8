# tests/conftest.py
import os

# must be set before app.main is imported (it builds the module-level app)
os.environ.setdefault("API_KEY", "test-key")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "test-key"


@pytest.fixture
def settings():
    return Settings(_env_file=None, API_KEY=API_KEY, SEED_SAMPLE_DATA=False)


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}


@pytest.fixture
def laptop():
    return {
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    }
