"""Remote catalog service client package.

Barcode product lookup and login, with an in-memory local simulation mode.
"""

from catalog_client.clients.catalog.client import RemoteCatalogClient
from catalog_client.clients.catalog.credentials import (
    CredentialStorage,
    InMemoryCredentialStorage,
)
from catalog_client.clients.catalog.exceptions import (
    CatalogClientError,
    DuplicateProductError,
    InvalidProductError,
)
from catalog_client.clients.catalog.fixtures import SAMPLE_PRODUCTS, LocalFixtureStore
from catalog_client.clients.catalog.models import (
    ApiResult,
    AuthResult,
    ClientConfig,
    FailureReason,
    Product,
    ProductRecord,
)


__all__ = [
    "SAMPLE_PRODUCTS",
    "ApiResult",
    "AuthResult",
    "CatalogClientError",
    "ClientConfig",
    "CredentialStorage",
    "DuplicateProductError",
    "FailureReason",
    "InMemoryCredentialStorage",
    "InvalidProductError",
    "LocalFixtureStore",
    "Product",
    "ProductRecord",
    "RemoteCatalogClient",
]
