"""Shared fixtures for the vehicle registry tests."""

from datetime import datetime, timedelta, timezone

import pytest

from src.vehicle_registry.application.services.token_service import TokenService


TEST_SECRET_KEY = "test-signing-key-with-enough-entropy-0123456789"
TEST_ISSUER = "vehicle-registry-tests"


class FixedClock:
    """Controllable clock returning aware UTC datetimes."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def clock():
    """Clock frozen on a whole second."""
    return FixedClock(datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_service(clock):
    """Token service using the frozen clock."""
    return TokenService(secret_key=TEST_SECRET_KEY, issuer=TEST_ISSUER, clock=clock)
