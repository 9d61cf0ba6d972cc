"""
Shared pytest fixtures and configuration for pagegrid tests.

This module provides sample record collections, a mocked transport for
remote sources and ready-made providers and grids.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from pagegrid import DataProvider, GridController, LocalSource, PageResult, RemoteSource


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")


STATUSES = ["active", "blocked", "pending"]


def make_people(count: int) -> list[dict[str, Any]]:
    """Builds count flat records with ids 1..count."""
    return [
        {
            "id": i,
            "name": f"Person {i:02d}",
            "status": STATUSES[i % 3],
            "age": 20 + (i * 7) % 30,
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def people_factory():
    """Returns the record builder, for tests that need a custom collection size."""
    return make_people


@pytest.fixture
def people() -> list[dict[str, Any]]:
    """25 flat records: 8 active, 9 blocked, 8 pending."""
    return make_people(25)


@pytest.fixture
def countries() -> list[dict[str, Any]]:
    """Records with nested mappings, for dotted-path columns."""
    return [
        {
            "code": "CN",
            "country": {"name": {"official": "People's Republic of China", "short": "China"}, "id": 6},
            "population": 1411,
        },
        {
            "code": "DE",
            "country": {"name": {"official": "Federal Republic of Germany", "short": "Germany"}, "id": 2},
            "population": 84,
        },
        {
            "code": "BR",
            "country": {"name": {"official": "Federative Republic of Brazil", "short": "Brazil"}, "id": 9},
            "population": 216,
        },
    ]


@pytest.fixture
def mock_transport():
    """
    Creates a mocked transport whose get() resolves to an empty page.

    Tests override ``mock_transport.get.return_value`` or ``side_effect``.
    """
    transport = AsyncMock()
    transport.get.return_value = PageResult(records=[], total_count=0)
    return transport


@pytest.fixture
def local_provider(people) -> DataProvider:
    """Provider over the 25 sample people with a page size of 10."""
    return DataProvider(LocalSource(records=people), page_size=10)


@pytest.fixture
def remote_source() -> RemoteSource:
    return RemoteSource(url="https://api.example.com/people")


@pytest.fixture
def remote_provider(remote_source, mock_transport) -> DataProvider:
    """Provider over a remote endpoint with a mocked transport."""
    return DataProvider(remote_source, transport=mock_transport, page_size=10)


@pytest.fixture
def local_grid(people) -> GridController:
    return GridController({"data": people, "defaultPageSize": 10})
