"""Catalog client exceptions.

These are raised by the local fixture store. The client catches them at its
own boundary and turns them into a log line, so they never reach callers of
the domain operations.
"""

from __future__ import annotations


class CatalogClientError(Exception):
    """Base exception for catalog client errors."""


class InvalidProductError(CatalogClientError):
    """Raised when a fixture record is missing its barcode or name."""


class DuplicateProductError(CatalogClientError):
    """Raised when a fixture record with the same barcode already exists."""

    def __init__(self, barcode: str) -> None:
        self.barcode = barcode
        super().__init__(f"Product with barcode {barcode} already exists")
