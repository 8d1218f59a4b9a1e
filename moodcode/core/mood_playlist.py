"""Mood playlist pipeline: plan terms, search, pick diverse tracks, publish."""
import logging
import random
from datetime import datetime, timezone
from typing import Any, Optional

from moodcode.config import PLAYLIST_TRACK_COUNT
from moodcode.core.diversity import select_diverse_tracks
from moodcode.core.errors import NotFoundError
from moodcode.core.mood_planner import plan_search_terms
from moodcode.core.playlist_publisher import publish_playlist
from moodcode.core.soundcloud_client import SoundCloudClient
from moodcode.core.track_search import search_tracks_for_terms

logger = logging.getLogger(__name__)


def playlist_title(mood: str, now: datetime) -> str:
    """Title dated in the timezone of now; callers pass server-local time."""
    return f"{mood[:1].upper()}{mood[1:]} Coding • {now.month}/{now.day}/{now.year}"


def playlist_description(mood: str, track_count: int) -> str:
    return (
        f"🎵 Generated playlist for {mood} mood based on coding patterns.\n\n"
        f"📱 Created by MoodCode Analytics\n"
        f"🎯 Mood: {mood}\n"
        f"📊 {track_count} tracks curated"
    )


def generate_mood_playlist(
    client: SoundCloudClient,
    token: str,
    mood: str,
    analysis_data: Any = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> dict:
    """Build and publish a playlist for mood; returns the assembled playlist dict.

    Raises NotFoundError when no search term yields a suitable track. ``tracks``
    always lists the selected tracks, even when ``degraded`` says SoundCloud's
    copy of the playlist has none attached.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)

    terms = plan_search_terms(mood, rng)
    pool = search_tracks_for_terms(client, token, terms, rng)
    if not pool:
        raise NotFoundError("No suitable tracks found for this mood")

    tracks = select_diverse_tracks(pool, PLAYLIST_TRACK_COUNT, rng)
    result = publish_playlist(
        client,
        token,
        playlist_title(mood, now.astimezone()),
        playlist_description(mood, len(tracks)),
        [t.get("id") for t in tracks],
    )
    logger.info(
        "Published %s playlist with %d track(s)%s",
        mood,
        len(tracks),
        " (degraded)" if result.degraded else "",
    )
    return {
        **result.playlist,
        "tracks": tracks,
        "mood": mood,
        "analysisData": analysis_data,
        "generatedAt": now.isoformat(),
        "degraded": result.degraded,
    }
