"""Envelope decoder: raw response bytes -> ``Envelope``.

Pure and stateless. Empty input is rejected before the parser runs, and a
parse or schema failure never yields a partially populated envelope.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from toon_response.errors import EmptyResponseError, MalformedPayloadError
from toon_response.models.envelope import Envelope

logger = logging.getLogger(__name__)

BodyInput = bytes | bytearray | memoryview | str


def as_bytes(body: BodyInput) -> bytes:
    """Normalize any accepted body input to ``bytes``."""
    if isinstance(body, str):
        return body.encode("utf-8")
    return bytes(body)


def decode_envelope(body: BodyInput | None) -> Envelope:
    """Decode a JSON envelope.

    Raises
    ------
    EmptyResponseError
        If ``body`` is ``None`` or zero-length.
    MalformedPayloadError
        If ``body`` is not a JSON object matching the envelope schema. The
        underlying ``pydantic.ValidationError`` is attached as the cause.
    """
    if body is None:
        raise EmptyResponseError("body is nil")

    raw = as_bytes(body)
    if len(raw) == 0:
        raise EmptyResponseError("body is empty")

    try:
        return Envelope.model_validate_json(raw)
    except ValidationError as exc:
        logger.debug(
            "Envelope decode failed: body_size=%d errors=%d",
            len(raw),
            exc.error_count(),
            extra={"body_size": len(raw), "error_code": MalformedPayloadError.code.value},
        )
        raise MalformedPayloadError(
            "failed to unmarshal response body",
            cause=exc,
            body_size=len(raw),
        ) from exc
