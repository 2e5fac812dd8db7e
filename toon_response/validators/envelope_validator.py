"""On-demand structural validation of a decoded envelope.

Checks only the success/error invariants. Metadata and payload shape are
left to the caller. Validation stops at the first failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from toon_response.errors import InvalidResponseError, NilHandlerError, NilResponseError

if TYPE_CHECKING:
    from toon_response.handler import ResponseHandler


def validate(handler: ResponseHandler | None) -> None:
    """Validate the envelope wrapped by ``handler``.

    Raises
    ------
    NilHandlerError
        If ``handler`` is ``None``.
    NilResponseError
        If the handler wraps no envelope.
    InvalidResponseError
        If ``success`` is false without an error detail, or the error detail
        has an empty code or message.
    """
    if handler is None:
        raise NilHandlerError("handler is nil")

    envelope = handler.envelope
    if envelope is None:
        raise NilResponseError("response is nil")

    # A failed response must say why
    if not envelope.success and envelope.error is None:
        raise InvalidResponseError("success is false but error object is missing")

    if envelope.error is not None:
        if not envelope.error.code:
            raise InvalidResponseError("error code is empty")
        if not envelope.error.message:
            raise InvalidResponseError("error message is empty")
