from __future__ import annotations

from typing import Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from gateway.core.config import Settings
from gateway.core.exceptions import ForbiddenOrigin, ServerMisconfigured

CORS_ALLOW_METHODS = "POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"
CORS_MAX_AGE = "86400"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def origin_from_referer(referer: Optional[str]) -> str:
    """Reduce a Referer URL to its scheme://host[:port] origin."""
    if not referer:
        return ""
    try:
        parts = urlsplit(referer.strip())
    except ValueError:
        return ""
    if not parts.scheme or not parts.netloc:
        return ""
    host = parts.hostname or ""
    if not host:
        return ""
    try:
        port = parts.port
    except ValueError:
        return ""
    if ":" in host:
        host = f"[{host}]"
    scheme = parts.scheme.lower()
    origin = f"{scheme}://{host}"
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        origin = f"{origin}:{port}"
    return origin


def resolve_request_origin(headers: Mapping[str, str]) -> str:
    origin = headers.get("origin")
    if origin:
        return origin
    return origin_from_referer(headers.get("referer"))


class OriginPolicy:
    """Exact-match allow-list for browser origins."""

    def __init__(self, settings: Settings):
        self.allowed_origins: List[str] = settings.origins()

    @property
    def configured(self) -> bool:
        return bool(self.allowed_origins)

    def is_allowed(self, origin: Optional[str]) -> bool:
        if not origin or not self.allowed_origins:
            return False
        return origin in self.allowed_origins

    def check(self, origin: Optional[str]) -> str:
        """
        Return ``origin`` if it may submit, otherwise raise.

        An empty allow-list is an operational fault and is reported before
        the caller's origin is even looked at.
        """
        if not self.allowed_origins:
            raise ServerMisconfigured()
        if not self.is_allowed(origin):
            raise ForbiddenOrigin()
        return origin

    def cors_origin(self, origin: Optional[str]) -> str:
        if self.is_allowed(origin):
            return origin
        return self.allowed_origins[0] if self.allowed_origins else ""

    def cors_headers(self, origin: Optional[str]) -> Dict[str, str]:
        headers = {
            "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
            "Access-Control-Max-Age": CORS_MAX_AGE,
        }
        allow_origin = self.cors_origin(origin)
        if allow_origin:
            headers["Access-Control-Allow-Origin"] = allow_origin
            headers["Vary"] = "Origin"
        return headers
