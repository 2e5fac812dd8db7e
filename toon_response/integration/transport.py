"""Transport adapters: HTTP results -> ``ResponseHandler``.

Reads the full body from the transport, decodes it, and cross-checks the
status code against the envelope's ``success`` flag. A non-2xx status with
``success: true`` is rejected as untrustworthy rather than silently trusting
either signal.

The body source is closed exactly once on every exit path. No retries are
attempted; that policy belongs to the caller.
"""

from __future__ import annotations

import http.client
import logging
from typing import BinaryIO

import httpx

from toon_response.config.settings import HandlerSettings
from toon_response.errors import InvalidResponseError, InvalidStatusCodeError, IOReadError
from toon_response.handler import ResponseHandler

logger = logging.getLogger(__name__)

# Failures raised by a file-like body source, including http.client responses
_READ_ERRORS = (OSError, ValueError, http.client.HTTPException)

# Failures raised by httpx while pulling a response body
_HTTPX_READ_ERRORS = (httpx.StreamError, httpx.TransportError, OSError)


def _check_status(
    handler: ResponseHandler,
    status_code: int,
    settings: HandlerSettings,
) -> ResponseHandler:
    """Reject a successful envelope delivered with a non-success status."""
    if (
        settings.check_status_code
        and not settings.is_success_status(status_code)
        and handler.is_success()
    ):
        logger.debug(
            "Status/success mismatch: status_code=%d request_id=%s",
            status_code,
            handler.request_id(),
            extra={
                "status_code": status_code,
                "request_id": handler.request_id(),
                "error_code": InvalidStatusCodeError.code.value,
            },
        )
        raise InvalidStatusCodeError(
            "http status code indicates error but response success is true",
            status_code=status_code,
            success=True,
        )
    return handler


def from_transport_result(
    status_code: int,
    body: BinaryIO | None,
    *,
    settings: HandlerSettings | None = None,
) -> ResponseHandler:
    """Build a handler from a status code and a readable body source.

    ``body`` is closed before this function returns, whatever the outcome.

    Raises
    ------
    InvalidResponseError
        If ``body`` is ``None``.
    IOReadError
        If reading ``body`` fails.
    EmptyResponseError, MalformedPayloadError
        Propagated unchanged from the decoder.
    InvalidStatusCodeError
        If ``status_code`` is outside the success range but ``success`` is true.
    """
    if body is None:
        raise InvalidResponseError(
            "response body is nil",
            status_code=status_code,
        )

    try:
        settings = settings or HandlerSettings()
        try:
            raw = body.read()
        except _READ_ERRORS as exc:
            raise IOReadError(
                "failed to read response body",
                cause=exc,
                status_code=status_code,
            ) from exc

        handler = ResponseHandler.from_bytes(raw)
        return _check_status(handler, status_code, settings)
    finally:
        body.close()


def from_http_response(
    response: httpx.Response | None,
    *,
    settings: HandlerSettings | None = None,
) -> ResponseHandler:
    """Build a handler from an ``httpx.Response`` (streamed or not).

    The response is closed exactly once before returning. Same errors as
    ``from_transport_result``.
    """
    if response is None:
        raise InvalidResponseError("http response is nil")

    status_code = response.status_code
    try:
        settings = settings or HandlerSettings()
        try:
            raw = response.read()
        except _HTTPX_READ_ERRORS as exc:
            raise IOReadError(
                "failed to read response body",
                cause=exc,
                status_code=status_code,
            ) from exc

        handler = ResponseHandler.from_bytes(raw)
        return _check_status(handler, status_code, settings)
    finally:
        response.close()
        logger.debug(
            "Released response body: status_code=%d",
            status_code,
            extra={"status_code": status_code},
        )


async def afrom_http_response(
    response: httpx.Response | None,
    *,
    settings: HandlerSettings | None = None,
) -> ResponseHandler:
    """Async variant of ``from_http_response`` for ``httpx.AsyncClient`` streams."""
    if response is None:
        raise InvalidResponseError("http response is nil")

    status_code = response.status_code
    try:
        settings = settings or HandlerSettings()
        try:
            raw = await response.aread()
        except _HTTPX_READ_ERRORS as exc:
            raise IOReadError(
                "failed to read response body",
                cause=exc,
                status_code=status_code,
            ) from exc

        handler = ResponseHandler.from_bytes(raw)
        return _check_status(handler, status_code, settings)
    finally:
        await response.aclose()
        logger.debug(
            "Released response body: status_code=%d",
            status_code,
            extra={"status_code": status_code},
        )
