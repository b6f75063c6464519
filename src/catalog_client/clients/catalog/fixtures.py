"""In-memory product fixtures served in local simulation mode."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final

from catalog_client.clients.catalog.exceptions import (
    DuplicateProductError,
    InvalidProductError,
)
from catalog_client.clients.catalog.models import ProductRecord


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


SAMPLE_PRODUCTS: Final[tuple[ProductRecord, ...]] = (
    ProductRecord(barcode="4607027662161", sku_name="Milk 3.2%"),
    ProductRecord(barcode="4607027662987", sku_name="Cheese 45%"),
    ProductRecord(barcode="4607027661123", sku_name="Bread White"),
    ProductRecord(barcode="4607027664526", sku_name="Eggs 10pcs"),
    ProductRecord(barcode="4607027662345", sku_name="Yogurt Strawberry"),
    ProductRecord(barcode="4607027664981", sku_name="Water 1.5L"),
    ProductRecord(barcode="4607027663782", sku_name="Juice Orange 1L"),
    ProductRecord(barcode="4607027665698", sku_name="Chocolate Dark"),
    ProductRecord(barcode="4607027661999", sku_name="Coffee 250g"),
    ProductRecord(barcode="4607027663456", sku_name="Tea Black 25 bags"),
)


class LocalFixtureStore:
    """Ordered barcode -> name records, at most one per barcode.

    Lookups scan the list; the store is small and append-only.
    """

    def __init__(self, records: Iterable[ProductRecord] = SAMPLE_PRODUCTS) -> None:
        self._records: list[ProductRecord] = []
        for record in records:
            self.add(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProductRecord]:
        return iter(list(self._records))

    def __contains__(self, barcode: object) -> bool:
        if not isinstance(barcode, str):
            return False
        return self.get(barcode) is not None

    def get(self, barcode: str) -> ProductRecord | None:
        """Return the first record with an exact barcode match, or None."""
        for record in self._records:
            if record.barcode == barcode:
                return record
        return None

    def add(self, product: ProductRecord | Mapping[str, Any]) -> ProductRecord:
        """Append a record built from the barcode and sku_name of ``product``.

        Raises:
            InvalidProductError: If barcode or sku_name is missing, empty or
                not a string, or if product is neither a mapping nor a record.
            DuplicateProductError: If the barcode is already present.
        """
        if isinstance(product, ProductRecord):
            barcode, sku_name = product.barcode, product.sku_name
        elif isinstance(product, Mapping):
            barcode, sku_name = product.get("barcode"), product.get("sku_name")
        else:
            msg = "Invalid product data: expected a mapping or ProductRecord"
            raise InvalidProductError(msg)

        if not isinstance(barcode, str) or not isinstance(sku_name, str):
            msg = "Invalid product data: barcode and sku_name must be strings"
            raise InvalidProductError(msg)

        if not barcode or not sku_name:
            msg = "Invalid product data: barcode and sku_name are required"
            raise InvalidProductError(msg)

        if self.get(barcode) is not None:
            raise DuplicateProductError(barcode)

        record = ProductRecord(barcode=barcode, sku_name=sku_name)
        self._records.append(record)
        return record
