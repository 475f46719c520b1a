from __future__ import annotations

from typing import Any, Optional

from starlette.requests import Request

from gateway.core.config import Settings
from gateway.core.logging import get_structlog_logger
from gateway.services.airtable import AirtableForwarder
from gateway.services.origin_policy import OriginPolicy, resolve_request_origin
from gateway.services.rate_limiter import RateLimiter
from gateway.services.sanitizer import SanitizedRecord, build_sanitized_record
from gateway.services.validation import (
    JSON_CONTENT_TYPE,
    SubmissionPayload,
    decode_json_object,
    ensure_supported_content_type,
    validate_submission,
)

logger = get_structlog_logger(__name__)


async def read_submission_payload(request: Request) -> SubmissionPayload:
    """Decode a JSON or URL-encoded body after the content-type gate."""
    mtype = ensure_supported_content_type(request.headers.get("content-type"))

    if mtype == JSON_CONTENT_TYPE:
        return SubmissionPayload(decode_json_object(await request.body()))

    form = await request.form()
    # Repeated keys keep their last value.
    return SubmissionPayload(dict(form.items()))


class SubmissionPipeline:
    """
    Lead submission flow:
    1. Origin policy
    2. Rate limit (check and count)
    3. Content-type gate and body decoding
    4. Required fields and email format
    5. Upstream configuration check
    6. Sanitization
    7. Single forward to Airtable

    Every stage raises a ``GatewayError`` to stop the flow.
    """

    def __init__(
        self,
        settings: Settings,
        rate_limit_store: Optional[Any] = None,
        forwarder: Optional[AirtableForwarder] = None,
    ):
        self.origin_policy = OriginPolicy(settings)
        self.rate_limiter = RateLimiter(settings, rate_limit_store)
        self.forwarder = forwarder or AirtableForwarder(settings)

    async def handle(self, request: Request) -> SanitizedRecord:
        origin = self.origin_policy.check(resolve_request_origin(request.headers))

        client_id = self.rate_limiter.client_id(request.headers)
        count = await self.rate_limiter.hit(client_id)

        payload = await read_submission_payload(request)
        validate_submission(payload)

        self.forwarder.ensure_configured()
        record = build_sanitized_record(payload, origin)
        await self.forwarder.forward(record)

        logger.info(
            "submission.accepted",
            origin=origin,
            client_id=client_id[:50],
            window_count=count,
        )
        return record
