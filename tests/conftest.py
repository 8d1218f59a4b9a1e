"""Shared fixtures: fake clock, mocked SoundCloud client, API test client."""
import random
import time
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from moodcode.api.app import app
from moodcode.api.state import AppState, get_state
from moodcode.core.challenge_store import ChallengeStore
from moodcode.core.soundcloud_client import SoundCloudClient


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _track(track_id, title, artist, playback_count=5000, likes_count=100, duration=200_000):
    return {
        "id": track_id,
        "title": title,
        "duration": duration,
        "playback_count": playback_count,
        "likes_count": likes_count,
        "user": {"username": artist},
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return ChallengeStore(clock=clock)


@pytest.fixture
def sc_client():
    client = MagicMock(spec=SoundCloudClient)
    return client


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def app_state(store, sc_client, rng):
    return AppState(
        challenge_store=store,
        soundcloud=sc_client,
        rng=rng,
        client_id="test-client",
        redirect_uri="http://localhost:3000/callback",
    )


@pytest.fixture
def api(app_state):
    app.dependency_overrides[get_state] = lambda: app_state
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_track():
    return _track


@pytest.fixture
def local_tz(monkeypatch):
    """Switch the process local timezone for the test; restored afterwards."""

    def set_tz(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield set_tz
    monkeypatch.undo()
    time.tzset()
