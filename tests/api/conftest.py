"""Shared fixtures for API tests."""

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def make_category(admin_client: TestClient) -> Callable[..., str]:
    """Create a category through the admin API and return its id."""

    def _make(name: str, **fields) -> str:
        response = admin_client.post(
            "/admin/api/categories",
            json={"name": name, **fields},
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _make


@pytest.fixture
def make_product(admin_client: TestClient) -> Callable[..., str]:
    """Create a product through the admin API and return its id."""

    def _make(name: str, **fields) -> str:
        payload = {"name": name, "price": "10.00", **fields}
        response = admin_client.post("/admin/api/products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _make
