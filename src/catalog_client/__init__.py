"""Async client for a remote product catalog.

Looks up products by barcode and logs users in against the catalog service,
with a local simulation mode backed by in-memory fixtures.
"""

from catalog_client.clients.catalog import (
    ApiResult,
    AuthResult,
    FailureReason,
    Product,
    ProductRecord,
    RemoteCatalogClient,
)


__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "AuthResult",
    "FailureReason",
    "Product",
    "ProductRecord",
    "RemoteCatalogClient",
    "__version__",
]
