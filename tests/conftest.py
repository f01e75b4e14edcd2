"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from keeperauth.config import Config
from keeperauth.core.modules.session.service import SessionService


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def secret():
    return "test-secret-key-for-testing-purposes-only"


@pytest.fixture
def config(secret):
    """Config with a usable signing secret."""
    return Config(auth_secret=secret)


@pytest.fixture
def config_without_secret():
    """Config as it would look if the secret were never provided."""
    return Config.model_construct(auth_secret=None)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 12, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def session_service(config, clock):
    return SessionService(config, clock=clock)


@pytest.fixture
def forge(secret):
    """Sign arbitrary claims, by default with the configured secret and HS256."""

    def _forge(claims: dict, key: str | None = None, algorithm: str = "HS256") -> str:
        return jwt.encode(claims, key or secret, algorithm=algorithm)

    return _forge
