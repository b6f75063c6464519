"""Credential storage used by the catalog client.

The client never reads persisted credentials itself; it only removes the
stored token when the service rejects it. Applications plug in their own
storage (keyring, file, browser bridge) by implementing the protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStorage(Protocol):
    """Key/value storage for persisted credentials."""

    def get(self, key: str) -> str | None:
        """Return the stored value for ``key``, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        ...

    def remove(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""
        ...


class InMemoryCredentialStorage:
    """Process-local credential storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
