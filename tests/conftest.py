"""Shared test fixtures for the catalog client tests.

Provides ready-made clients for local and real-network mode, a respx router
for the catalog service and a loguru sink that collects log records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import respx
from loguru import logger

from catalog_client.clients.catalog import (
    InMemoryCredentialStorage,
    RemoteCatalogClient,
)


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


CATALOG_BASE_URL = "http://catalog.test"


@pytest.fixture
def credential_storage() -> InMemoryCredentialStorage:
    """Credential storage holding a previously persisted token."""
    return InMemoryCredentialStorage({"auth_token": "persisted-token"})


@pytest.fixture
def local_client() -> RemoteCatalogClient:
    """Client in local simulation mode without artificial latency."""
    return RemoteCatalogClient(local_mode=True, simulated_latency=0)


@pytest.fixture
async def real_client(
    credential_storage: InMemoryCredentialStorage,
) -> AsyncIterator[RemoteCatalogClient]:
    """Client in real-network mode pointed at the mocked catalog service."""
    client = RemoteCatalogClient(
        CATALOG_BASE_URL,
        credential_storage=credential_storage,
    )
    yield client
    await client.shutdown()


@pytest.fixture
def catalog_api() -> Iterator[respx.MockRouter]:
    """respx router intercepting calls to the catalog service."""
    with respx.mock(base_url=CATALOG_BASE_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def log_records() -> Iterator[list[dict[str, Any]]]:
    """Collect loguru records emitted during the test."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: records.append(message.record),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)
