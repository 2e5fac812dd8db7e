"""Public models for the Toon response envelope."""

from toon_response.models.envelope import (
    Envelope,
    ErrorDetail,
    Metadata,
    RateLimit,
    UtcDatetime,
)

__all__ = [
    "Envelope",
    "ErrorDetail",
    "Metadata",
    "RateLimit",
    "UtcDatetime",
]
