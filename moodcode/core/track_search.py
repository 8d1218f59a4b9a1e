"""Run planned search terms against SoundCloud and keep engaging, song-length tracks."""
import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from moodcode.config import SEARCH_CONCURRENCY
from moodcode.core.errors import UpstreamError
from moodcode.core.soundcloud_client import SoundCloudClient

logger = logging.getLogger(__name__)

RESULTS_PER_TERM = 4
MAX_RANDOM_OFFSET = 50
MIN_DURATION_MS = 90_000
MAX_DURATION_MS = 480_000
MIN_PLAYBACKS = 1000
MIN_LIKES = 50


def is_suitable_track(track: dict) -> bool:
    """Engagement (plays or likes) and a duration strictly between 1.5 and 8 minutes."""
    playbacks = track.get("playback_count") or 0
    likes = track.get("likes_count") or 0
    duration = track.get("duration") or 0
    has_engagement = playbacks > MIN_PLAYBACKS or likes > MIN_LIKES
    return has_engagement and MIN_DURATION_MS < duration < MAX_DURATION_MS


def _search_term(client: SoundCloudClient, token: str, term: str, offset: int) -> List[dict]:
    try:
        batch = client.search_tracks(
            token,
            term,
            limit=RESULTS_PER_TERM,
            offset=offset,
            min_duration_ms=MIN_DURATION_MS,
        )
    except UpstreamError as e:
        logger.warning("Search error for %r: %s (%s)", term, e.message, e.details)
        return []
    return [t for t in batch if isinstance(t, dict) and is_suitable_track(t)]


def search_tracks_for_terms(
    client: SoundCloudClient,
    token: str,
    terms: Sequence[str],
    rng: Optional[random.Random] = None,
    max_workers: int = SEARCH_CONCURRENCY,
) -> List[dict]:
    """Pool of suitable tracks across all terms, in term order. May contain duplicates.

    A failing term is logged and skipped; the pool is empty only if nothing passed.
    """
    if not terms:
        return []
    rng = rng or random.Random()
    offsets = [rng.randrange(MAX_RANDOM_OFFSET) for _ in terms]
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        batches = pool.map(
            lambda args: _search_term(client, token, *args),
            zip(terms, offsets),
        )
        pooled = [track for batch in batches for track in batch]
    logger.info("Collected %d candidate track(s) from %d term(s)", len(pooled), len(terms))
    return pooled
