"""Remote catalog service HTTP client.

This module provides an async client for looking up products by barcode and
for logging in against the remote catalog service. In local mode requests
are answered from an in-memory fixture store after a short simulated delay,
and the network is never touched.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Final

import httpx
import orjson

from catalog_client.clients.catalog.credentials import InMemoryCredentialStorage
from catalog_client.clients.catalog.exceptions import (
    DuplicateProductError,
    InvalidProductError,
)
from catalog_client.clients.catalog.fixtures import LocalFixtureStore
from catalog_client.clients.catalog.models import (
    ApiResult,
    AuthResult,
    ClientConfig,
    FailureReason,
    LoginRequest,
    Product,
    ProductRecord,
)
from catalog_client.core.config import DEFAULT_BASE_URL, get_settings
from catalog_client.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from catalog_client.clients.catalog.credentials import CredentialStorage
    from catalog_client.core.config import Settings

logger = get_logger(__name__)


PRODUCT_LOOKUP_PATH: Final[str] = "/products/by-barcode/"
TOKEN_PATH: Final[str] = "/auth/token"  # noqa: S105


class RemoteCatalogClient:
    """Async client for the remote catalog service.

    Every request goes through a single dispatcher that either calls the
    service or, in local mode, answers from the fixture store. Failures
    never escape as exceptions: ``api_request`` returns ``None`` and
    ``request`` returns an ``ApiResult`` carrying the failure reason.

    Example:
        ```python
        client = RemoteCatalogClient("https://catalog.example.com")
        client.add_auth_error_listener(show_login_screen)

        auth = await client.login("cashier", "secret")
        product = await client.get_product("4607027662161")

        await client.shutdown()
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        auth_token: str | None = None,
        *,
        local_mode: bool = False,
        timeout: float = 10.0,
        simulated_latency: float = 0.3,
        credential_header: str = "X-API-Key",
        credential_storage_key: str = "auth_token",  # noqa: S107
        fixtures: LocalFixtureStore | None = None,
        credential_storage: CredentialStorage | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Origin of the catalog service, used in real mode.
            auth_token: Initial API token, if already known.
            local_mode: Serve requests from the fixture store.
            timeout: HTTP request timeout in seconds.
            simulated_latency: Delay in seconds before local responses.
            credential_header: Header carrying the API token.
            credential_storage_key: Storage key removed on auth errors.
            fixtures: Fixture store; defaults to the sample products.
            credential_storage: Persisted credential storage.
            http_client: HTTP client to use instead of an owned one.
        """
        self.config = ClientConfig(
            base_url=base_url,
            auth_token=auth_token,
            local_mode=local_mode,
        )
        self.timeout = timeout
        self.simulated_latency = simulated_latency
        self.credential_header = credential_header
        self.credential_storage_key = credential_storage_key
        self.fixtures = fixtures if fixtures is not None else LocalFixtureStore()
        self.credential_storage: CredentialStorage = (
            credential_storage
            if credential_storage is not None
            else InMemoryCredentialStorage()
        )
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._auth_error_listeners: list[Callable[[], None]] = []

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        **kwargs: Any,
    ) -> RemoteCatalogClient:
        """Build a client from application settings.

        Keyword arguments are passed through to the constructor, which is
        how collaborators (fixtures, storage, HTTP client) are injected.
        """
        settings = settings or get_settings()
        catalog = settings.catalog
        return cls(
            base_url=catalog.base_url,
            auth_token=settings.CATALOG_AUTH_TOKEN,
            local_mode=catalog.local_mode,
            timeout=catalog.timeout,
            simulated_latency=catalog.simulated_latency,
            credential_header=catalog.credential_header,
            credential_storage_key=catalog.credential_storage_key,
            **kwargs,
        )

    # ---------- lifecycle ----------

    async def initialize(self) -> None:
        """Initialize the HTTP client with connection pooling."""
        if self._http_client is not None:
            return

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
            ),
        )
        self._owns_http_client = True
        logger.info(
            "RemoteCatalogClient initialized",
            base_url=self.config.base_url,
            local_mode=self.config.local_mode,
            timeout=self.timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("RemoteCatalogClient shutdown")

    # ---------- configuration ----------

    def set_base_url(self, url: str) -> None:
        """Replace the service origin used in real mode."""
        self.config.base_url = url

    def set_auth_token(self, token: str | None) -> None:
        """Replace the token sent with subsequent requests."""
        self.config.auth_token = token

    def set_local_mode(self, enabled: bool) -> None:  # noqa: FBT001
        """Switch between local simulation and real network mode."""
        self.config.local_mode = enabled
        logger.info("Catalog client mode changed", local_mode=enabled)

    def get_headers(self) -> dict[str, str]:
        """Get default headers for API requests."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        token = self.config.auth_token
        if token:
            headers[self.credential_header] = token
            logger.debug(
                "Token passed in credential header",
                header=self.credential_header,
                token_prefix=f"{token[:8]}...",
            )
        else:
            logger.warning("Token not set! Request will be made without authorization.")

        return headers

    # ---------- auth error listeners ----------

    def add_auth_error_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run when the service rejects our credentials."""
        self._auth_error_listeners.append(listener)

    def remove_auth_error_listener(self, listener: Callable[[], None]) -> None:
        """Unregister a callback; unknown callbacks are ignored."""
        if listener in self._auth_error_listeners:
            self._auth_error_listeners.remove(listener)

    def _invalidate_credentials(self) -> None:
        try:
            self.credential_storage.remove(self.credential_storage_key)
        except Exception:
            logger.exception("Failed to clear stored credentials")

        for listener in list(self._auth_error_listeners):
            try:
                listener()
            except Exception:
                logger.exception("Auth error listener failed")

    # ---------- dispatch ----------

    async def request(self, endpoint: str, **options: Any) -> ApiResult:
        """Dispatch a request and classify its outcome.

        Args:
            endpoint: Path appended to the base URL, e.g. ``/auth/token``.
            **options: ``method`` (default GET), ``headers`` merged over the
                computed ones, and any other ``httpx`` request argument.

        Returns:
            ApiResult with the parsed body, or the reason there is none.
        """
        if self.config.local_mode:
            return await self._simulate(endpoint, options.get("method"))

        url = f"{self.config.base_url}{endpoint}"
        method = str(options.pop("method", "GET")).upper()
        headers = {**self.get_headers(), **(options.pop("headers", None) or {})}

        if self._http_client is None:
            await self.initialize()

        assert self._http_client is not None

        try:
            response = await self._http_client.request(
                method, url, headers=headers, **options
            )
            logger.info(
                "API response",
                status_code=response.status_code,
                method=method,
                url=url,
            )
            if response.status_code == 200:
                return ApiResult(
                    payload=orjson.loads(response.content),
                    status_code=response.status_code,
                )
        except (httpx.HTTPError, httpx.InvalidURL, orjson.JSONDecodeError) as e:
            logger.error("Connection error", url=url, error=str(e))
            return ApiResult(failure=FailureReason.TRANSPORT_FAILURE)
        except Exception:
            logger.exception("Unexpected error during API request", url=url)
            return ApiResult(failure=FailureReason.TRANSPORT_FAILURE)

        return self._classify_failure(endpoint, response.status_code)

    def _classify_failure(self, endpoint: str, status_code: int) -> ApiResult:
        if status_code == 404:
            return ApiResult(failure=FailureReason.NOT_FOUND, status_code=status_code)

        if status_code in (401, 403):
            logger.error(
                "Authorization error. Please login again.",
                status_code=status_code,
                endpoint=endpoint,
            )
            # A rejected lookup does not invalidate the session
            if PRODUCT_LOOKUP_PATH not in endpoint:
                self._invalidate_credentials()
            return ApiResult(failure=FailureReason.UNAUTHORIZED, status_code=status_code)

        logger.error("API error", status_code=status_code, endpoint=endpoint)
        return ApiResult(failure=FailureReason.SERVER_ERROR, status_code=status_code)

    async def api_request(self, endpoint: str, **options: Any) -> Any | None:
        """Dispatch a request and return its payload, or None on any failure."""
        result = await self.request(endpoint, **options)
        return result.payload

    # ---------- local simulation ----------

    async def _simulate(self, endpoint: str, method: str | None) -> ApiResult:
        await asyncio.sleep(self.simulated_latency)

        logger.debug("Local API simulation", endpoint=endpoint, method=method)

        if PRODUCT_LOOKUP_PATH in endpoint:
            barcode = endpoint.rsplit("/", 1)[-1]
            payload = self.get_local_product(barcode)
            if payload is None:
                return ApiResult(failure=FailureReason.NOT_FOUND)
            return ApiResult(payload=payload)

        if endpoint == TOKEN_PATH and str(method).upper() == "POST":
            # Tokens are issued by the real auth endpoint only
            return ApiResult(failure=FailureReason.NOT_FOUND)

        logger.warning("Unhandled endpoint in local mode", endpoint=endpoint)
        return ApiResult(failure=FailureReason.UNHANDLED_ENDPOINT)

    async def simulate_api_response(self, endpoint: str, **options: Any) -> Any | None:
        """Answer ``endpoint`` from local data after the simulated delay."""
        result = await self._simulate(endpoint, options.get("method"))
        return result.payload

    # ---------- fixture store ----------

    def get_local_product(self, barcode: str) -> dict[str, str] | None:
        """Get a product by barcode from the local fixtures."""
        record = self.fixtures.get(barcode)
        logger.debug(
            "Local product lookup",
            barcode=barcode,
            found=record is not None,
        )
        return record.to_payload() if record else None

    def add_local_product(self, product: ProductRecord | Mapping[str, Any]) -> bool:
        """Add a product to the local fixtures.

        Returns:
            True if the product was added, False if it was rejected.
        """
        try:
            record = self.fixtures.add(product)
        except InvalidProductError:
            logger.error("Invalid product data")
            return False
        except DuplicateProductError as e:
            logger.warning("Product with this barcode already exists", barcode=e.barcode)
            return False

        logger.info(
            "Added product to local database",
            barcode=record.barcode,
            sku_name=record.sku_name,
        )
        return True

    # ---------- domain operations ----------

    async def get_product(self, barcode: str) -> Product | None:
        """Get a product by barcode.

        Returns:
            Product, or None if not found or the request failed.
        """
        data = await self.api_request(f"{PRODUCT_LOOKUP_PATH}{barcode}", method="GET")
        if data is None:
            return None

        if not isinstance(data, dict):
            logger.warning("Unexpected product payload", barcode=barcode)
            return None

        return Product(barcode=data.get("barcode"), name=data.get("sku_name"))

    async def login(self, username: str, password: str) -> AuthResult | None:
        """Log in and keep the issued token for subsequent requests.

        Returns:
            AuthResult with the token and user, or None if login failed.
        """
        body = orjson.dumps(
            LoginRequest(username=username, password=password).model_dump()
        )
        data = await self.api_request(TOKEN_PATH, method="POST", content=body)

        if isinstance(data, dict) and data.get("access_token"):
            token = data["access_token"]
            self.set_auth_token(token)
            user = data.get("user") or {"username": username}
            logger.info("Login succeeded", username=username)
            return AuthResult(token=token, user=user)

        logger.info("Login failed", username=username)
        return None
