from __future__ import annotations

from gateway.core.config import Settings
from gateway.core.exceptions import AuthNotConfigured, InvalidCredentials
from gateway.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)


def constant_time_compare(provided: str, expected: str) -> bool:
    """
    Compare two strings without leaking where they first differ.

    A length mismatch returns immediately. Equal-length inputs are always
    scanned in full, XOR-accumulating every character position.
    """
    if len(provided) != len(expected):
        return False
    result = 0
    for a, b in zip(provided, expected):
        result |= ord(a) ^ ord(b)
    return result == 0


class AdminAuthenticator:
    """Single shared-password check. No token or session is issued."""

    def __init__(self, settings: Settings):
        self._secret = settings.admin_password

    def authenticate(self, password: str) -> None:
        if not self._secret:
            logger.error("admin_auth.not_configured")
            raise AuthNotConfigured()

        if not constant_time_compare(password, self._secret):
            logger.warning("admin_auth.rejected")
            raise InvalidCredentials()

        logger.info("admin_auth.accepted")
