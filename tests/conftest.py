"""Pytest fixtures for bookamatpy tests."""

from typing import Any

import httpx
import pytest

from bookamatpy import AsyncBookamatClient


@pytest.fixture
def credentials() -> dict[str, str]:
    """Return test client credentials."""
    return {
        "year": "2024",
        "username": "test_user",
        "api_key": "test_api_key_12345",
    }


@pytest.fixture
def base_url() -> str:
    """Return the base API URL."""
    return "https://www.bookamat.com/api/v1"


@pytest.fixture
def api_root(base_url: str) -> str:
    """Return the tenant root for the test credentials."""
    return f"{base_url}/at/2024"


@pytest.fixture
async def async_client(credentials: dict[str, str]):
    """Create an AsyncBookamatClient for testing."""
    client = AsyncBookamatClient(**credentials)
    yield client
    await client.close()


class FakeTransport:
    """Replays canned responses and records every GET."""

    def __init__(self, responses: list[httpx.Response | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[httpx.URL, dict[str, str]]] = []

    async def get(self, url: Any, *, headers: Any) -> httpx.Response:
        self.calls.append((httpx.URL(str(url)), dict(headers)))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def pages(self) -> list[str | None]:
        """Page parameter of each recorded request."""
        return [url.params.get("page") for url, _ in self.calls]


@pytest.fixture
def fake_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def mock_booking() -> dict[str, Any]:
    """Return mock booking data."""
    return {
        "id": 1001,
        "status": "1",
        "title": "Office supplies",
        "document_number": "",
        "date": "2024-03-15",
        "date_invoice": "2024-03-14",
        "date_delivery": None,
        "date_order": None,
        "costcentre": None,
        "amounts": [
            {
                "group": "2",
                "bankaccount": {"id": 11, "name": "Bank"},
                "costaccount": {"id": 22, "name": "Office"},
                "purchasetaxaccount": {"id": 33, "name": "Vorsteuer"},
                "amount": "120.00",
                "amount_after_tax": "100.00",
                "tax_percent": "20.00",
                "tax_value": "20.00",
                "deductibility_tax_percent": "100.00",
                "deductibility_tax_value": "20.00",
                "deductibility_amount_percent": "100.00",
                "deductibility_amount_value": "100.00",
                "foreign_business_base": None,
                "country_dep": "",
                "country_rec": "",
            }
        ],
        "tags": [{"id": 5, "booking": 1001, "tag": 7, "name": "Q1"}],
        "attachments": [{"id": 9, "name": "invoice.pdf", "size": 2048}],
        "vatin": "",
        "country": "at",
        "description": "#12345",
        "create_date": "2024-03-15T10:00:00Z",
        "update_date": "2024-03-15T10:00:00Z",
    }


@pytest.fixture
def mock_bank_account() -> dict[str, Any]:
    """Return mock bank account data."""
    return {
        "id": 11,
        "name": "Bank",
        "position": 1,
        "flag_balance": True,
        "opening_balance": "0.00",
        "counter_booked_bookings": 3,
        "counter_open_bookings": 0,
        "counter_deleted_bookings": 0,
        "counter_bookingtemplates": 0,
    }
