"""Error hierarchy for envelope decoding, transport adaptation and validation.

Every failure raised by this package is a ``ToonError`` subclass carrying a
machine-readable ``code``, a human message, an optional wrapped cause and an
optional context mapping (input size, status code, target type, ...).
Callers can either catch a specific subclass or catch ``ToonError`` and
branch on ``err.code``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes, one per failure kind."""

    INVALID_RESPONSE = "INVALID_RESPONSE"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    NIL_HANDLER = "NIL_HANDLER"
    NIL_RESPONSE = "NIL_RESPONSE"
    EMPTY_DATA = "EMPTY_DATA"
    IO_READ = "IO_READ"
    INVALID_STATUS_CODE = "INVALID_STATUS_CODE"


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ToonError(Exception):
    """Base error for all response-handling failures."""

    code: ErrorCode = ErrorCode.INVALID_RESPONSE
    message: str = "Invalid response"

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
        **context: Any,
    ) -> None:
        self.message = message or self.__class__.message
        self.cause = cause
        self.context: dict[str, Any] = context
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"[{self.code.value}] {self.message}: {self.cause}"
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code.value!r}, "
            f"message={self.message!r}, context={self.context!r})"
        )

    def is_code(self, code: ErrorCode | str) -> bool:
        """Return ``True`` when this error is of the given kind."""
        return self.code == ErrorCode(code)


class InvalidResponseError(ToonError):
    """Unusable transport result, missing decode target, or failed structural check."""

    code = ErrorCode.INVALID_RESPONSE
    message = "Invalid response"


class EmptyResponseError(ToonError):
    """Raw input was ``None`` or zero-length."""

    code = ErrorCode.EMPTY_RESPONSE
    message = "Response body is empty"


class MalformedPayloadError(ToonError):
    """Envelope or payload could not be decoded into the expected shape."""

    code = ErrorCode.MALFORMED_PAYLOAD
    message = "Failed to decode payload"


class NilHandlerError(ToonError):
    """Validation was invoked without a handler."""

    code = ErrorCode.NIL_HANDLER
    message = "Handler is nil"


class NilResponseError(ToonError):
    """Validation was invoked on a handler that wraps no envelope."""

    code = ErrorCode.NIL_RESPONSE
    message = "Response is nil"


class EmptyDataError(ToonError):
    """Payload decode requested but the envelope carries no data."""

    code = ErrorCode.EMPTY_DATA
    message = "Response data is empty"


class IOReadError(ToonError):
    """Reading the transport body failed."""

    code = ErrorCode.IO_READ
    message = "Failed to read response body"


class InvalidStatusCodeError(ToonError):
    """Transport status code and envelope success flag disagree."""

    code = ErrorCode.INVALID_STATUS_CODE
    message = "HTTP status code indicates error but response success is true"

