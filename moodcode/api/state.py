"""Shared application state (injected into routes)."""
import random

from moodcode.config import (
    SOUNDCLOUD_CLIENT_ID,
    SOUNDCLOUD_CLIENT_SECRET,
    SOUNDCLOUD_REDIRECT_URI,
)
from moodcode.core.challenge_store import ChallengeStore
from moodcode.core.soundcloud_client import SoundCloudClient


class AppState:
    def __init__(
        self,
        challenge_store: ChallengeStore | None = None,
        soundcloud: SoundCloudClient | None = None,
        rng: random.Random | None = None,
        client_id: str = SOUNDCLOUD_CLIENT_ID,
        redirect_uri: str = SOUNDCLOUD_REDIRECT_URI,
    ) -> None:
        self.challenge_store = challenge_store if challenge_store is not None else ChallengeStore()
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        # Non-security randomness only (shuffles, offsets); PKCE uses secrets
        self.rng = rng if rng is not None else random.Random()
        self._soundcloud = soundcloud

    @property
    def soundcloud(self) -> SoundCloudClient:
        if self._soundcloud is None:
            self._soundcloud = SoundCloudClient(
                client_id=self.client_id,
                client_secret=SOUNDCLOUD_CLIENT_SECRET,
                redirect_uri=self.redirect_uri,
            )
        return self._soundcloud


_state = AppState()


def get_state() -> AppState:
    return _state
