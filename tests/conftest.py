# Shared fixtures for the gateway test suite.
#
# The Redis rate-limit store is replaced by an in-memory fake with a manual
# clock; the Airtable call is patched per test with AsyncMock.

from typing import Dict, Optional, Tuple

import pytest

from gateway.core.config import Settings

ALLOWED_ORIGIN = "https://online.example.com"
SECOND_ORIGIN = "https://example.pages.dev"
ADMIN_PASSWORD = "s3cret-admin-pass"


class FakeRateLimitStore:
    """Async GET / SET EX subset of Redis with a controllable clock."""

    def __init__(self):
        self.now = 0.0
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self.set_calls = []

    async def get(self, key):
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key, value, ex=None):
        self.set_calls.append((key, value, ex))
        self._data[key] = (value, self.now + ex if ex else None)
        return True

    def advance(self, seconds):
        self.now += seconds


def make_settings(**overrides) -> Settings:
    values = dict(
        environment="production",
        allowed_origin=f"{ALLOWED_ORIGIN}, {SECOND_ORIGIN}",
        airtable_base_id="appBASE",
        airtable_table_id="tblLEADS",
        airtable_token="pat-test-token",
        admin_password=ADMIN_PASSWORD,
        rate_limit_max_requests=10,
        rate_limit_redis_url=None,
        sentry_dsn=None,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def store():
    return FakeRateLimitStore()
