from datetime import datetime, timezone

import pytest

from gateway.services.sanitizer import (
    MAX_FIELD_LENGTH,
    SanitizedRecord,
    build_sanitized_record,
    sanitize_string,
    utc_timestamp,
)
from gateway.services.validation import SubmissionPayload

TRICKY_INPUTS = [
    "",
    "   ",
    "Jo Ann",
    "  Jo Ann  ",
    "<script>alert(1)</script>",
    "< a",
    "a >",
    " <> ",
    "x" * 999 + " y",
    "<" + "y" * 1200,
    "x" * 998 + "<>  z",
    "line\nbreak\t",
]


def test_sanitize_string_trims_and_strips_brackets():
    assert sanitize_string("  <b>Jo</b> Ann  ") == "bJo/b Ann"


def test_sanitize_string_non_string_is_empty():
    assert sanitize_string(None) == ""
    assert sanitize_string(42) == ""
    assert sanitize_string(["a"]) == ""


def test_sanitize_string_caps_length():
    assert len(sanitize_string("a" * 5000)) == MAX_FIELD_LENGTH


@pytest.mark.parametrize("value", TRICKY_INPUTS)
def test_sanitize_string_is_idempotent(value):
    once = sanitize_string(value)
    assert sanitize_string(once) == once
    assert "<" not in once and ">" not in once
    assert len(once) <= MAX_FIELD_LENGTH


def test_utc_timestamp_format():
    now = datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    assert utc_timestamp(now) == "2026-01-02T03:04:05.678Z"


def test_build_sanitized_record_assigns_timestamp():
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    payload = SubmissionPayload({
        "fullName": " <i>Jo Ann</i> ",
        "email": "jo@x.com",
        "whatsapp": "+1555",
    })
    record = build_sanitized_record(payload, "https://online.example.com", now=now)

    assert record.full_name == "iJo Ann/i"
    assert record.location == ""
    assert record.goals == ""
    assert record.source_page == ""
    assert record.submitted_at == "2026-01-02T03:04:05.000Z"
    assert record.origin == "https://online.example.com"


def test_build_sanitized_record_keeps_client_timestamp():
    payload = SubmissionPayload({
        "fullName": "Jo",
        "email": "jo@x.com",
        "whatsapp": "+1555",
        "submittedAt": "2025-11-30T10:00:00.000Z",
        "sourcePage": " /pricing ",
    })
    record = build_sanitized_record(payload, "https://online.example.com")

    assert record.submitted_at == "2025-11-30T10:00:00.000Z"
    assert record.source_page == "/pricing"


def test_sanitized_record_rejects_raw_values():
    with pytest.raises(ValueError):
        SanitizedRecord(
            full_name="<b>raw</b>",
            email="jo@x.com",
            whatsapp="+1555",
            location="",
            goals="",
            submitted_at="2026-01-02T03:04:05.000Z",
            source_page="",
            origin="https://online.example.com",
        )


def test_sanitized_record_is_immutable():
    record = build_sanitized_record(
        SubmissionPayload({"fullName": "Jo", "email": "jo@x.com", "whatsapp": "1"}),
        "https://online.example.com",
    )
    with pytest.raises(AttributeError):
        record.full_name = "changed"
