from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Tuple

import aiohttp

from gateway.core.config import Settings
from gateway.core.exceptions import ServerConfigurationError, SubmissionFailed
from gateway.core.logging import get_structlog_logger
from gateway.services.sanitizer import SanitizedRecord

logger = get_structlog_logger(__name__)

# SanitizedRecord attribute -> Airtable column
FIELD_MAP = {
    "full_name": "Full Name",
    "email": "Email",
    "whatsapp": "WhatsApp",
    "location": "Location",
    "goals": "Goals",
    "submitted_at": "Submitted At",
    "source_page": "Source Page",
    "origin": "Origin",
}


def format_airtable_record(record: SanitizedRecord) -> Dict[str, Any]:
    return {"fields": {column: getattr(record, attr) for attr, column in FIELD_MAP.items()}}


def extract_error_message(body: Any) -> str:
    """
    Pull a readable message out of an Airtable error body.

    Airtable answers either ``{"error": {"type": ..., "message": ...}}`` or
    ``{"error": "NOT_FOUND"}``.
    """
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            message = error.get("message") or error.get("type")
            if message:
                return str(message)
        elif isinstance(error, str) and error:
            return error
    return "Unknown error"


class AirtableForwarder:
    """Sends sanitized submissions to a single Airtable table."""

    def __init__(self, settings: Settings):
        self.base_id = settings.airtable_base_id
        self.table_id = settings.airtable_table_id
        self._token = settings.airtable_token
        self.api_url = settings.airtable_api_url.rstrip("/")

    def ensure_configured(self) -> None:
        if not (self.base_id and self.table_id and self._token):
            logger.error(
                "upstream.not_configured",
                base_id_set=bool(self.base_id),
                table_id_set=bool(self.table_id),
                token_set=bool(self._token),
            )
            raise ServerConfigurationError()

    @property
    def records_url(self) -> str:
        return f"{self.api_url}/{self.base_id}/{self.table_id}"

    async def post_record(self, payload: Dict[str, Any]) -> Tuple[int, Optional[Any]]:
        """POST ``payload`` once and return (status, decoded JSON body or None)."""
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        async with aiohttp.ClientSession() as session:
            async with session.post(self.records_url, json=payload, headers=headers) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                return response.status, body

    async def forward(self, record: SanitizedRecord) -> Optional[Any]:
        """
        Create one Airtable row for ``record``.

        Single attempt: any non-2xx answer or transport fault is raised as
        ``SubmissionFailed`` carrying the upstream detail.
        """
        self.ensure_configured()
        payload = format_airtable_record(record)

        try:
            status, body = await self.post_record(payload)
        except asyncio.TimeoutError:
            logger.error("upstream.timeout", url=self.records_url)
            raise SubmissionFailed(detail="Airtable API request timed out")
        except aiohttp.ClientError as e:
            logger.error("upstream.client_error", error=str(e)[:200])
            raise SubmissionFailed(detail=f"Airtable API client error: {str(e)[:200]}")

        if not 200 <= status < 300:
            detail = f"Airtable API {status}: {extract_error_message(body)}"
            logger.error("upstream.failed", status=status, detail=detail)
            raise SubmissionFailed(detail=detail)

        logger.info("upstream.record_created", status=status)
        return body
