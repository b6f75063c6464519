"""Unit tests for credential storage."""

from __future__ import annotations

import pytest

from catalog_client.clients.catalog import (
    CredentialStorage,
    InMemoryCredentialStorage,
)


pytestmark = pytest.mark.unit


class TestInMemoryCredentialStorage:
    """Tests for the in-memory storage."""

    def test_implements_protocol(self) -> None:
        """Should satisfy the CredentialStorage protocol."""
        assert isinstance(InMemoryCredentialStorage(), CredentialStorage)

    def test_set_and_get(self) -> None:
        """Should return stored values."""
        storage = InMemoryCredentialStorage()

        storage.set("auth_token", "abc")

        assert storage.get("auth_token") == "abc"

    def test_remove(self) -> None:
        """Should delete a stored value."""
        storage = InMemoryCredentialStorage({"auth_token": "abc"})

        storage.remove("auth_token")

        assert storage.get("auth_token") is None

    def test_remove_missing_key(self) -> None:
        """Should ignore removal of an unknown key."""
        storage = InMemoryCredentialStorage()

        storage.remove("auth_token")

        assert storage.get("auth_token") is None

    def test_initial_values_copied(self) -> None:
        """Should not mutate the mapping it was seeded from."""
        initial = {"auth_token": "abc"}
        storage = InMemoryCredentialStorage(initial)

        storage.remove("auth_token")

        assert initial == {"auth_token": "abc"}
