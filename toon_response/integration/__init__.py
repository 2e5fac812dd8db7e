"""Adapters between HTTP transports and response handlers."""

from toon_response.integration.transport import (
    afrom_http_response,
    from_http_response,
    from_transport_result,
)

__all__ = [
    "afrom_http_response",
    "from_http_response",
    "from_transport_result",
]
