"""Read-only accessor over a decoded response envelope.

``ResponseHandler`` is built once from raw bytes and never mutated
afterwards. Every query is total: missing envelope, metadata or rate-limit
blocks yield ``None``/``""``/``False`` rather than raising. Only
``decode_payload`` and ``validate`` raise.

The handler is a frozen dataclass over frozen pydantic models, so it can be
shared between threads without a lock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from toon_response.decoder import BodyInput, as_bytes, decode_envelope
from toon_response.errors import EmptyDataError, InvalidResponseError, MalformedPayloadError
from toon_response.models.envelope import Envelope, ErrorDetail, Metadata, RateLimit
from toon_response.validators.envelope_validator import validate as validate_handler

T = TypeVar("T")

RATE_LIMIT_UNAVAILABLE = "rate limit information not available"

_ERROR_SEPARATOR = " | "


def format_rfc3339(value: datetime | None) -> str:
    """Format an instant as RFC3339 with second precision (``Z`` for UTC)."""
    if value is None:
        return "unknown"
    value = value.replace(microsecond=0)
    if value.tzinfo is None or value.utcoffset() == timedelta(0):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat()


@lru_cache(maxsize=128)
def _adapter_for(target: Any) -> TypeAdapter[Any]:
    """Return a cached ``TypeAdapter``; the cache holds strong references to ``target``."""
    return TypeAdapter(target)


def _type_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or repr(target)


@dataclass(frozen=True)
class ResponseHandler:
    """Immutable wrapper around a decoded envelope and its original bytes.

    Parameters
    ----------
    envelope:
        The decoded envelope, or ``None`` when no decodable state exists.
    body:
        The original, undecoded response body.
    """

    envelope: Envelope | None
    body: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.body, bytes):
            object.__setattr__(self, "body", as_bytes(self.body))

    @classmethod
    def from_bytes(cls, body: BodyInput | None) -> ResponseHandler:
        """Decode ``body`` and wrap the resulting envelope.

        Raises ``EmptyResponseError`` or ``MalformedPayloadError``.
        """
        envelope = decode_envelope(body)
        return cls(envelope=envelope, body=as_bytes(body))  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Success / error state
    # ------------------------------------------------------------------

    def is_success(self) -> bool:
        if self.envelope is None:
            return False
        return self.envelope.success

    def is_error(self) -> bool:
        """Return ``True`` for a failed envelope carrying an error detail.

        A handler without an envelope counts as an error even though it has
        no error detail; its state is unknown.
        """
        if self.envelope is None:
            return True
        return not self.envelope.success and self.envelope.error is not None

    def error(self) -> ErrorDetail | None:
        if self.envelope is None:
            return None
        return self.envelope.error

    def error_string(self) -> str:
        """Join code, message, details and field with ``" | "``.

        Returns ``""`` when no error detail is present.
        """
        err = self.error()
        if err is None:
            return ""

        parts = [err.code]
        if err.message:
            parts.append(err.message)
        if err.details:
            parts.append(err.details)
        if err.field:
            parts.append(f"field: {err.field}")
        return _ERROR_SEPARATOR.join(parts)

    # ------------------------------------------------------------------
    # Payload
    # ------------------------------------------------------------------

    def raw_payload(self) -> bytes | None:
        """Return the payload as compact JSON bytes, or ``None`` if absent.

        The bytes are fixed at decode time; nothing a caller does to the
        returned value or the envelope changes later results."""
        if self.envelope is None or not self.envelope.has_data:
            return None
        return self.envelope.data

    def decode_payload(self, target: type[T] | Any) -> T:
        """Decode the payload into ``target`` and return the decoded value.

        ``target`` is anything pydantic can validate into: a model, a
        dataclass, a ``TypedDict`` or a builtin generic such as
        ``dict[str, int]``.

        Raises
        ------
        InvalidResponseError
            If ``target`` is ``None`` or not a decodable type.
        EmptyDataError
            If the envelope carries no payload.
        MalformedPayloadError
            If the payload does not fit ``target``.
        """
        if target is None:
            raise InvalidResponseError("target type is nil")

        data = self.raw_payload()
        if not data:
            raise EmptyDataError("response data is empty")

        try:
            adapter = _adapter_for(target)
        except (PydanticSchemaGenerationError, TypeError) as exc:
            raise InvalidResponseError(
                "target type is not decodable",
                cause=exc,
                target=_type_name(target),
            ) from exc

        try:
            return adapter.validate_json(data)
        except ValidationError as exc:
            raise MalformedPayloadError(
                "failed to unmarshal data into target type",
                cause=exc,
                data_size=len(data),
                target=_type_name(target),
            ) from exc

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def metadata(self) -> Metadata | None:
        if self.envelope is None:
            return None
        return self.envelope.meta

    def request_id(self) -> str:
        meta = self.metadata()
        if meta is None:
            return ""
        return meta.request_id or ""

    def api_version(self) -> str:
        meta = self.metadata()
        if meta is None:
            return ""
        return meta.api_version or ""

    def timestamp(self) -> datetime | None:
        meta = self.metadata()
        if meta is None:
            return None
        return meta.timestamp

    # ------------------------------------------------------------------
    # Rate limiting
    # ------------------------------------------------------------------

    def rate_limit(self) -> RateLimit | None:
        meta = self.metadata()
        if meta is None:
            return None
        return meta.rate_limit

    def is_rate_limited(self) -> bool:
        rl = self.rate_limit()
        if rl is None:
            return False
        return rl.remaining <= 0

    def rate_limit_reset_time(self) -> datetime | None:
        rl = self.rate_limit()
        if rl is None:
            return None
        return rl.reset

    def rate_limit_status(self) -> str:
        """Return e.g. ``"250/1000 requests remaining (reset: 2025-12-31T23:59:59Z)"``."""
        rl = self.rate_limit()
        if rl is None:
            return RATE_LIMIT_UNAVAILABLE

        remaining = max(rl.remaining, 0)
        return (
            f"{remaining}/{rl.limit} requests remaining "
            f"(reset: {format_rfc3339(rl.reset)})"
        )

    # ------------------------------------------------------------------
    # Raw access and diagnostics
    # ------------------------------------------------------------------

    def raw_body(self) -> bytes:
        """Return the original undecoded body.

        ``bytes`` is immutable, so callers cannot alter the stored body
        through the returned value.
        """
        return self.body

    def validate(self) -> None:
        """Run structural validation; see ``toon_response.validators``."""
        validate_handler(self)

    def describe(self) -> str:
        if self.is_success():
            request_id = self.request_id()
            if request_id:
                return f"Success, RequestID={request_id}"
            return "Success"

        error_string = self.error_string()
        if error_string:
            return f"Error={error_string}"
        return "Error"

    def to_dict(self) -> dict[str, Any]:
        """Summarize the response as a JSON-compatible dict."""
        err = self.error()
        rl = self.rate_limit()
        timestamp = self.timestamp()
        return {
            "success": self.is_success(),
            "is_error": self.is_error(),
            "request_id": self.request_id(),
            "api_version": self.api_version(),
            "timestamp": format_rfc3339(timestamp) if timestamp else None,
            "error": err.model_dump(exclude_none=True) if err else None,
            "error_string": self.error_string(),
            "rate_limit": (
                {
                    "limit": rl.limit,
                    "remaining": rl.remaining,
                    "reset": format_rfc3339(rl.reset) if rl.reset else None,
                    "is_rate_limited": self.is_rate_limited(),
                }
                if rl
                else None
            ),
            "rate_limit_status": self.rate_limit_status(),
            "data_size": len(self.raw_payload() or b""),
        }

    def __str__(self) -> str:
        return f"ResponseHandler({self.describe()})"


def new_handler(body: BodyInput | None) -> ResponseHandler:
    """Decode ``body`` into a ``ResponseHandler``."""
    return ResponseHandler.from_bytes(body)
