"""Property tests for ResponseHandler accessors.

Covers the success/error truth table, error string composition, rate-limit
reporting, copy isolation of raw bytes, and concurrent read consistency.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor

from hypothesis import given, settings
from hypothesis import strategies as st

from toon_response.handler import ResponseHandler, new_handler


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

error_texts = st.text(
    alphabet=st.characters(min_codepoint=32, max_codepoint=126),
    max_size=40,
)

error_blocks = st.fixed_dictionaries(
    {"code": error_texts, "message": error_texts},
    optional={"details": error_texts, "field": error_texts},
)

rate_limits = st.fixed_dictionaries({
    "limit": st.integers(min_value=0, max_value=100_000),
    "remaining": st.integers(min_value=-100_000, max_value=100_000),
    "reset": st.just("2025-12-31T23:59:59Z"),
})

request_ids = st.from_regex(r"req-[a-z0-9]{3,12}", fullmatch=True)


def _handler(doc: dict) -> ResponseHandler:
    return new_handler(json.dumps(doc).encode())


# ---------------------------------------------------------------------------
# Success / error truth table
# ---------------------------------------------------------------------------


@settings(max_examples=100)
@given(success=st.booleans(), error=st.one_of(st.none(), error_blocks))
def test_is_error_iff_failed_with_error_detail(success: bool, error: dict | None) -> None:
    doc: dict = {"success": success}
    if error is not None:
        doc["error"] = error
    handler = _handler(doc)

    assert handler.is_success() is success
    assert handler.is_error() is (not success and error is not None)


def test_absent_envelope_is_both_unsuccessful_and_error() -> None:
    handler = ResponseHandler(envelope=None)
    assert handler.is_success() is False
    assert handler.is_error() is True


# ---------------------------------------------------------------------------
# Error string composition
# ---------------------------------------------------------------------------


@settings(max_examples=200)
@given(error=error_blocks)
def test_error_string_joins_non_empty_parts_in_order(error: dict) -> None:
    handler = _handler({"success": False, "error": error})

    expected = [error["code"]]
    if error["message"]:
        expected.append(error["message"])
    if error.get("details"):
        expected.append(error["details"])
    if error.get("field"):
        expected.append(f"field: {error['field']}")

    assert handler.error_string() == " | ".join(expected)


@settings(max_examples=100)
@given(error=error_blocks)
def test_describe_reflects_error_string(error: dict) -> None:
    handler = _handler({"success": False, "error": error})
    error_string = handler.error_string()
    if error_string:
        assert handler.describe() == f"Error={error_string}"
    else:
        assert handler.describe() == "Error"


@settings(max_examples=100)
@given(request_id=st.one_of(st.none(), request_ids))
def test_describe_success(request_id: str | None) -> None:
    doc: dict = {"success": True}
    if request_id is not None:
        doc["meta"] = {"request_id": request_id}
    handler = _handler(doc)

    if request_id:
        assert handler.describe() == f"Success, RequestID={request_id}"
    else:
        assert handler.describe() == "Success"


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------


@settings(max_examples=200)
@given(rate_limit=st.one_of(st.none(), rate_limits))
def test_is_rate_limited_iff_block_present_and_exhausted(rate_limit: dict | None) -> None:
    doc: dict = {"success": True}
    if rate_limit is not None:
        doc["meta"] = {"rate_limit": rate_limit}
    handler = _handler(doc)

    expected = rate_limit is not None and rate_limit["remaining"] <= 0
    assert handler.is_rate_limited() is expected


@settings(max_examples=200)
@given(rate_limit=rate_limits)
def test_rate_limit_status_never_shows_negative_remaining(rate_limit: dict) -> None:
    handler = _handler({"success": True, "meta": {"rate_limit": rate_limit}})
    status = handler.rate_limit_status()

    shown = int(status.split("/", 1)[0])
    assert shown == max(rate_limit["remaining"], 0)
    assert status.endswith(f"/{rate_limit['limit']} requests remaining (reset: 2025-12-31T23:59:59Z)")


# ---------------------------------------------------------------------------
# Copy isolation
# ---------------------------------------------------------------------------


@settings(max_examples=100)
@given(data=st.dictionaries(st.text(max_size=8), st.integers(), min_size=1, max_size=5))
def test_mutating_returned_bytes_never_changes_handler(data: dict) -> None:
    handler = _handler({"success": True, "data": data})
    body_before = handler.raw_body()
    payload_before = handler.raw_payload()

    body = bytearray(handler.raw_body())
    payload = bytearray(handler.raw_payload())
    body[:] = b"X" * len(body)
    payload[:] = b"X" * len(payload)

    assert handler.raw_body() == body_before
    assert handler.raw_payload() == payload_before
    assert json.loads(handler.raw_payload()) == data


# ---------------------------------------------------------------------------
# Concurrent reads
# ---------------------------------------------------------------------------


def test_concurrent_reads_match_sequential() -> None:
    handler = new_handler(
        b'{"success": true, "data": {"id": 1}, "meta": {"request_id": "req-123"}}'
    )
    expected = (handler.is_success(), handler.request_id(), handler.raw_payload())

    def _read(_: int) -> tuple[bool, str, bytes | None]:
        return handler.is_success(), handler.request_id(), handler.raw_payload()

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(_read, range(500)))

    assert all(result == expected for result in results)
