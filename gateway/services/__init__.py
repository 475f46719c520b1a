"""
Submission gateway services: origin policy, rate limiting, validation,
sanitization, admin authentication and the Airtable forwarder.
"""

from gateway.services.admin_auth import AdminAuthenticator, constant_time_compare
from gateway.services.airtable import AirtableForwarder, format_airtable_record
from gateway.services.origin_policy import OriginPolicy, resolve_request_origin
from gateway.services.rate_limiter import RateLimiter
from gateway.services.sanitizer import SanitizedRecord, build_sanitized_record, sanitize_string
from gateway.services.submission import SubmissionPipeline
from gateway.services.validation import SubmissionPayload, validate_submission

__all__ = [
    # Origin / CORS
    "OriginPolicy",
    "resolve_request_origin",
    # Rate limiting
    "RateLimiter",
    # Validation and sanitization
    "SubmissionPayload",
    "validate_submission",
    "SanitizedRecord",
    "build_sanitized_record",
    "sanitize_string",
    # Admin
    "AdminAuthenticator",
    "constant_time_compare",
    # Upstream
    "AirtableForwarder",
    "format_airtable_record",
    "SubmissionPipeline",
]
