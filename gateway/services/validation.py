"""Content-type gate, payload decoding and field validation for submissions."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from gateway.core.exceptions import (
    InvalidEmail,
    InvalidRequestFormat,
    MissingFields,
    UnsupportedContentType,
)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
ACCEPTED_CONTENT_TYPES = (JSON_CONTENT_TYPE, FORM_CONTENT_TYPE)

REQUIRED_FIELDS = ("fullName", "email", "whatsapp")

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class SubmissionPayload:
    """Raw, untrusted form fields exactly as decoded from the request body."""

    fields: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


def media_type(content_type: Optional[str]) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def ensure_supported_content_type(content_type: Optional[str]) -> str:
    mtype = media_type(content_type)
    if mtype not in ACCEPTED_CONTENT_TYPES:
        raise UnsupportedContentType()
    return mtype


def decode_json_object(body: bytes) -> Dict[str, Any]:
    try:
        data = json.loads(body or b"")
    except (ValueError, UnicodeDecodeError):
        raise InvalidRequestFormat()
    if not isinstance(data, dict):
        raise InvalidRequestFormat()
    return data


def missing_required_fields(payload: SubmissionPayload) -> List[str]:
    missing = []
    for name in REQUIRED_FIELDS:
        value = payload.get(name)
        if not isinstance(value, str) or not value.strip():
            missing.append(name)
    return missing


def validate_email(email: Optional[str]) -> bool:
    """Validate email format."""
    if not isinstance(email, str):
        return False
    return bool(_EMAIL_PATTERN.match(email.strip()))


def validate_submission(payload: SubmissionPayload) -> None:
    """Raise the first validation failure for ``payload``, if any."""
    missing = missing_required_fields(payload)
    if missing:
        raise MissingFields(missing)

    if not validate_email(payload.get("email")):
        raise InvalidEmail()
