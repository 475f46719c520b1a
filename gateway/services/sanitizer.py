from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Optional

from gateway.services.validation import SubmissionPayload

MAX_FIELD_LENGTH = 1000
_FORBIDDEN_CHARS = str.maketrans("", "", "<>")


def sanitize_string(value: Any) -> str:
    """
    Strip angle brackets, trim whitespace and cap the length.

    Brackets go first and trailing whitespace is trimmed again after
    truncation, so the result is a fixed point of this function.
    """
    if not isinstance(value, str) or not value:
        return ""
    cleaned = value.translate(_FORBIDDEN_CHARS).strip()
    return cleaned[:MAX_FIELD_LENGTH].rstrip()


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class SanitizedRecord:
    full_name: str
    email: str
    whatsapp: str
    location: str
    goals: str
    submitted_at: str
    source_page: str
    origin: str

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if sanitize_string(value) != value:
                raise ValueError(f"{f.name} has not been sanitized")


def build_sanitized_record(
    payload: SubmissionPayload,
    origin: str,
    now: Optional[datetime] = None,
) -> SanitizedRecord:
    """Build the record forwarded upstream from a validated payload."""
    submitted_at = sanitize_string(payload.get("submittedAt")) or utc_timestamp(now)

    return SanitizedRecord(
        full_name=sanitize_string(payload.get("fullName")),
        email=sanitize_string(payload.get("email")),
        whatsapp=sanitize_string(payload.get("whatsapp")),
        location=sanitize_string(payload.get("location")),
        goals=sanitize_string(payload.get("goals")),
        submitted_at=submitted_at,
        source_page=sanitize_string(payload.get("sourcePage")),
        origin=sanitize_string(origin),
    )
