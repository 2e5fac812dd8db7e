"""Pydantic models for the Toon API response envelope.

Wire shape:
{ success: bool, data: Any | None, error: {...} | None, meta: {...} | None }

All models are frozen and decoded in strict mode, so a handler built from
them can be shared between threads without locking. Unknown keys are ignored.
The payload is held as compact JSON bytes, never as a live dict or list.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any

import pydantic_core
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, field_serializer


def _as_utc(value: datetime) -> datetime:
    """Interpret naive instants as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


def _freeze_payload(value: Any) -> bytes | None:
    """Serialize a decoded JSON value to compact bytes; null stays ``None``."""
    if value is None:
        return None
    return pydantic_core.to_json(value)


JsonPayload = Annotated[bytes | None, BeforeValidator(_freeze_payload)]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")


class ErrorDetail(_FrozenModel):
    """Structured error carried inside a failed envelope."""

    code: str = ""
    message: str = ""
    details: str | None = None
    field: str | None = None


class RateLimit(_FrozenModel):
    """Quota, remaining calls and reset instant reported by the upstream."""

    limit: int = 0
    remaining: int = 0  # May be negative from a misbehaving upstream
    reset: UtcDatetime | None = None


class Metadata(_FrozenModel):
    """Auxiliary response information that is not part of the payload."""

    timestamp: UtcDatetime | None = None
    request_id: str | None = None
    api_version: str | None = None
    rate_limit: RateLimit | None = None


class Envelope(_FrozenModel):
    """Decoded top-level response envelope."""

    success: bool
    data: JsonPayload = None
    error: ErrorDetail | None = None
    meta: Metadata | None = None

    @property
    def has_data(self) -> bool:
        """Return ``True`` when a non-null payload is present."""
        return self.data is not None

    @field_serializer("data")
    def serialize_data(self, value: bytes | None) -> Any:
        if value is None:
            return None
        return pydantic_core.from_json(value)
