import asyncio
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from conftest import make_settings
from gateway.core.exceptions import ServerConfigurationError, SubmissionFailed
from gateway.services.airtable import (
    AirtableForwarder,
    extract_error_message,
    format_airtable_record,
)
from gateway.services.sanitizer import build_sanitized_record
from gateway.services.validation import SubmissionPayload


def make_record():
    payload = SubmissionPayload({
        "fullName": "Jo Ann",
        "email": "jo@x.com",
        "whatsapp": "+1555",
        "location": "Lyon",
        "goals": "Run a marathon",
        "submittedAt": "2026-01-02T03:04:05.000Z",
        "sourcePage": "/pricing",
    })
    return build_sanitized_record(payload, "https://online.example.com")


def test_format_airtable_record():
    assert format_airtable_record(make_record()) == {
        "fields": {
            "Full Name": "Jo Ann",
            "Email": "jo@x.com",
            "WhatsApp": "+1555",
            "Location": "Lyon",
            "Goals": "Run a marathon",
            "Submitted At": "2026-01-02T03:04:05.000Z",
            "Source Page": "/pricing",
            "Origin": "https://online.example.com",
        }
    }


def test_extract_error_message():
    assert extract_error_message(
        {"error": {"type": "INVALID_REQUEST_UNKNOWN", "message": "Invalid request: bad field"}}
    ) == "Invalid request: bad field"
    assert extract_error_message({"error": {"type": "AUTHENTICATION_REQUIRED"}}) == "AUTHENTICATION_REQUIRED"
    assert extract_error_message({"error": "NOT_FOUND"}) == "NOT_FOUND"
    assert extract_error_message({}) == "Unknown error"
    assert extract_error_message(None) == "Unknown error"
    assert extract_error_message("<html>") == "Unknown error"


def test_records_url():
    forwarder = AirtableForwarder(make_settings(airtable_api_url="https://api.airtable.com/v0/"))
    assert forwarder.records_url == "https://api.airtable.com/v0/appBASE/tblLEADS"


@pytest.mark.parametrize("missing", ["airtable_base_id", "airtable_table_id", "airtable_token"])
def test_ensure_configured(missing):
    forwarder = AirtableForwarder(make_settings(**{missing: None}))
    with pytest.raises(ServerConfigurationError) as exc_info:
        forwarder.ensure_configured()
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_forward_success():
    forwarder = AirtableForwarder(make_settings())
    post = AsyncMock(return_value=(200, {"id": "rec123", "fields": {}}))

    with patch.object(AirtableForwarder, "post_record", new=post):
        body = await forwarder.forward(make_record())

    assert body["id"] == "rec123"
    post.assert_awaited_once()
    assert post.call_args.args[0]["fields"]["Full Name"] == "Jo Ann"


@pytest.mark.asyncio
async def test_forward_maps_upstream_error():
    forwarder = AirtableForwarder(make_settings())
    post = AsyncMock(return_value=(422, {"error": {"type": "INVALID", "message": "Unknown field name"}}))

    with patch.object(AirtableForwarder, "post_record", new=post):
        with pytest.raises(SubmissionFailed) as exc_info:
            await forwarder.forward(make_record())

    assert exc_info.value.detail == "Airtable API 422: Unknown field name"
    assert exc_info.value.to_body() == {"error": "Failed to submit application. Please try again later."}
    assert exc_info.value.to_body(expose_details=True)["details"] == "Airtable API 422: Unknown field name"
    # Single attempt, no retry.
    assert post.await_count == 1


@pytest.mark.asyncio
async def test_forward_without_error_body():
    forwarder = AirtableForwarder(make_settings())
    post = AsyncMock(return_value=(502, None))

    with patch.object(AirtableForwarder, "post_record", new=post):
        with pytest.raises(SubmissionFailed) as exc_info:
            await forwarder.forward(make_record())

    assert exc_info.value.detail == "Airtable API 502: Unknown error"


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()])
async def test_forward_transport_errors(error):
    forwarder = AirtableForwarder(make_settings())
    post = AsyncMock(side_effect=error)

    with patch.object(AirtableForwarder, "post_record", new=post):
        with pytest.raises(SubmissionFailed):
            await forwarder.forward(make_record())

    assert post.await_count == 1


@pytest.mark.asyncio
async def test_forward_requires_configuration():
    forwarder = AirtableForwarder(make_settings(airtable_token=None))
    post = AsyncMock(return_value=(200, {}))

    with patch.object(AirtableForwarder, "post_record", new=post):
        with pytest.raises(ServerConfigurationError):
            await forwarder.forward(make_record())

    post.assert_not_awaited()
