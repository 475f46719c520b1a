# gateway/core/exceptions.py
from __future__ import annotations

from typing import Any, Dict, List, Optional


class GatewayError(Exception):
    """Base exception for every terminal gateway response."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_body(self, expose_details: bool = False) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        body.update(self.details)
        return body


class ServerMisconfigured(GatewayError):
    """No allowed origins are configured."""
    def __init__(self, message: str = "Server misconfiguration: no allowed origins", **kwargs):
        super().__init__(message, status_code=503, **kwargs)


class ForbiddenOrigin(GatewayError):
    """Caller origin is missing or not in the allow-list."""
    def __init__(self, message: str = "Forbidden origin", **kwargs):
        super().__init__(message, status_code=403, **kwargs)


class RateLimited(GatewayError):
    """Client identity exhausted its submissions for the window."""
    def __init__(self, message: str = "Rate limit exceeded. Please try again later.", **kwargs):
        super().__init__(message, status_code=429, **kwargs)


class UnsupportedContentType(GatewayError):
    def __init__(self, message: str = "Unsupported content type", **kwargs):
        super().__init__(message, status_code=400, **kwargs)


class InvalidRequestFormat(GatewayError):
    """Request body could not be decoded into a mapping."""
    def __init__(self, message: str = "Invalid request format", **kwargs):
        super().__init__(message, status_code=400, **kwargs)


class MissingFields(GatewayError):
    """One or more required fields are absent or blank."""
    def __init__(self, missing: List[str], message: str = "Missing required fields", **kwargs):
        super().__init__(message, status_code=400, **kwargs)
        self.missing = list(missing)

    def to_body(self, expose_details: bool = False) -> Dict[str, Any]:
        body = super().to_body(expose_details)
        body["missing"] = self.missing
        return body


class InvalidEmail(GatewayError):
    def __init__(self, message: str = "Invalid email format", **kwargs):
        super().__init__(message, status_code=400, **kwargs)


class ServerConfigurationError(GatewayError):
    """Upstream base, table or token is not configured."""
    def __init__(self, message: str = "Server configuration error", **kwargs):
        super().__init__(message, status_code=500, **kwargs)


class AuthNotConfigured(GatewayError):
    def __init__(self, message: str = "Admin authentication not configured", **kwargs):
        super().__init__(message, status_code=500, **kwargs)


class InvalidCredentials(GatewayError):
    def __init__(self, message: str = "Invalid password", **kwargs):
        super().__init__(message, status_code=401, **kwargs)


class SubmissionFailed(GatewayError):
    """Upstream rejected the record or could not be reached.

    ``detail`` holds the upstream error text. It is only rendered when the
    caller asks for it, which the app does outside production.
    """

    def __init__(
        self,
        detail: Optional[str] = None,
        message: str = "Failed to submit application. Please try again later.",
        **kwargs,
    ):
        super().__init__(message, status_code=500, **kwargs)
        self.detail = detail

    def to_body(self, expose_details: bool = False) -> Dict[str, Any]:
        body = super().to_body(expose_details)
        if expose_details and self.detail:
            body["details"] = self.detail
        return body


class MethodNotAllowed(GatewayError):
    def __init__(self, message: str = "Method not allowed", **kwargs):
        super().__init__(message, status_code=405, **kwargs)
