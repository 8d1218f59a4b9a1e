"""Data models for PKCE challenges, mood profiles and playlists."""
from moodcode.models.challenge import ChallengeRecord
from moodcode.models.mood import MoodProfile
from moodcode.models.playlist import PublishResult

__all__ = [
    "ChallengeRecord",
    "MoodProfile",
    "PublishResult",
]
