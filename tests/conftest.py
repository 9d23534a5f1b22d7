"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from typing import Any
from unittest.mock import AsyncMock

import pytest

from stockbook.config import reset_settings
from stockbook.core.entities import Session, User
from stockbook.core.interfaces import IBackendClient


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fresh settings per test, with a fake Paystack key and no retry delay."""
    monkeypatch.setenv("PAYSTACK_PUBLIC_KEY", "pk_test_123")
    monkeypatch.setenv("BACKEND_BASE_URL", "http://backend.test")
    monkeypatch.setenv("BACKEND_RETRY_DELAY", "0")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def session() -> Session:
    return Session(token="tok-123", user=User(id="u1", name="Ada", email="ada@example.com"))


@pytest.fixture
def anonymous() -> Session:
    return Session.anonymous()


@pytest.fixture
def mock_backend() -> AsyncMock:
    return AsyncMock(spec=IBackendClient)


@pytest.fixture
def inventory_payload() -> dict[str, Any]:
    """Inventory list wrapped the way the backend usually sends it."""
    return {
        "items": [
            {
                "_id": "inv-1",
                "itemName": "Palm oil",
                "quantity": 10,
                "unit": "kg",
                "totalAmount": 1000,
                "shippingFee": 100,
                "costPerUnit": 110,
                "createdAt": "2024-05-01T10:00:00Z",
            },
            {
                "_id": "inv-2",
                "itemName": "Groundnut oil",
                "quantity": 4,
                "unit": "litre",
                "totalAmount": "2000",
                "costPerUnit": 500,
            },
        ]
    }


@pytest.fixture
def invoice_payload() -> dict[str, Any]:
    return {
        "_id": "i-1",
        "invoiceNumber": "INV-001",
        "orderId": "o-1",
        "client": {"name": "Chidi Okafor", "email": "chidi@example.com"},
        "status": "pending",
        "issuedDate": "2024-05-02T09:00:00Z",
        "dueDate": "2024-05-16T09:00:00Z",
        "totalAmount": 750,
        "items": [{"name": "Palm oil", "quantity": 5, "unitPrice": 150, "total": 750}],
    }
