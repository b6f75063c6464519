"""Data models for the remote catalog client."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class FailureReason(StrEnum):
    """Why a dispatched request produced no payload."""

    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    SERVER_ERROR = "SERVER_ERROR"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
    UNHANDLED_ENDPOINT = "UNHANDLED_ENDPOINT"


@dataclass(slots=True)
class ClientConfig:
    """Mutable per-client configuration."""

    base_url: str
    auth_token: str | None = None
    local_mode: bool = False


@dataclass(frozen=True, slots=True)
class ProductRecord:
    """A fixture entry as served by the catalog API."""

    barcode: str
    sku_name: str

    def to_payload(self) -> dict[str, str]:
        """Return the record in the wire shape of the barcode endpoint."""
        return {"barcode": self.barcode, "sku_name": self.sku_name}


@dataclass(frozen=True, slots=True)
class Product:
    """Product as returned to callers of get_product."""

    barcode: str | None
    name: str | None


@dataclass(frozen=True, slots=True)
class AuthResult:
    """Outcome of a successful login."""

    token: str
    user: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ApiResult:
    """Outcome of one dispatched request.

    ``payload`` is the parsed body on success and ``None`` otherwise;
    ``failure`` says why there is no payload. A local lookup that finds
    nothing is reported as NOT_FOUND.
    """

    payload: Any = None
    failure: FailureReason | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        """True when a payload was produced."""
        return self.failure is None and self.payload is not None


class LoginRequest(BaseModel):
    """Request body for POST /auth/token."""

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password")
