"""Typed decoding, access and validation of Toon API response envelopes."""

from toon_response.config.settings import HandlerSettings
from toon_response.decoder import decode_envelope
from toon_response.errors import (
    EmptyDataError,
    EmptyResponseError,
    ErrorCode,
    InvalidResponseError,
    InvalidStatusCodeError,
    IOReadError,
    MalformedPayloadError,
    NilHandlerError,
    NilResponseError,
    ToonError,
)
from toon_response.handler import RATE_LIMIT_UNAVAILABLE, ResponseHandler, new_handler
from toon_response.integration.transport import (
    afrom_http_response,
    from_http_response,
    from_transport_result,
)
from toon_response.models.envelope import Envelope, ErrorDetail, Metadata, RateLimit
from toon_response.validators.envelope_validator import validate

__all__ = [
    "RATE_LIMIT_UNAVAILABLE",
    "EmptyDataError",
    "EmptyResponseError",
    "Envelope",
    "ErrorCode",
    "ErrorDetail",
    "HandlerSettings",
    "IOReadError",
    "InvalidResponseError",
    "InvalidStatusCodeError",
    "MalformedPayloadError",
    "Metadata",
    "NilHandlerError",
    "NilResponseError",
    "RateLimit",
    "ResponseHandler",
    "ToonError",
    "afrom_http_response",
    "decode_envelope",
    "from_http_response",
    "from_transport_result",
    "new_handler",
    "validate",
]
