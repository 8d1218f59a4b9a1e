"""Core services: PKCE challenge store, SoundCloud client, auth flow, mood playlists."""
from moodcode.core.challenge_store import ChallengeStore
from moodcode.core.soundcloud_client import SoundCloudClient

__all__ = ["ChallengeStore", "SoundCloudClient"]
