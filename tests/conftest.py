"""Shared fixtures for booking order tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from booking_orders.client import ApiResponse, OrderDataClient
from booking_orders.operations import OrderOperations
from booking_orders.store import Store


@pytest.fixture
def store():
    """Fresh store with initial state."""
    return Store()


@pytest.fixture
def client():
    """Data client whose endpoints are AsyncMocks returning empty successes."""
    mock = MagicMock(spec=OrderDataClient)
    empty = ApiResponse(success=True, message="ok", data=[])
    for name in (
        "list_by_status",
        "get_detail",
        "cancel",
        "reschedule",
        "process_partial_payment",
        "submit_feedback",
        "report_issue",
    ):
        setattr(mock, name, AsyncMock(return_value=empty))
    return mock


@pytest.fixture
def notifier():
    """Notifier that records calls."""
    return MagicMock()


@pytest.fixture
def ops(store, client, notifier):
    return OrderOperations(store, client, notifier=notifier, page_limit=2)
