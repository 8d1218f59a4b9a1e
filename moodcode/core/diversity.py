"""Pick a varied subset of tracks: one per title, and one per artist where possible."""
import random
from typing import List, Optional, Sequence

DEFAULT_TARGET = 15


def _artist_key(track: dict) -> str:
    user = track.get("user") or {}
    return (user.get("username") or "").lower()


def _title_key(track: dict) -> str:
    return (track.get("title") or "").lower()


def select_diverse_tracks(
    tracks: Sequence[dict],
    target: int = DEFAULT_TARGET,
    rng: Optional[random.Random] = None,
) -> List[dict]:
    """At most target tracks with unique titles, shuffled.

    First pass takes tracks whose artist and title are both new. If that falls
    short, a second pass tops up with any new title, repeating artists.
    """
    rng = rng or random.Random()
    selected: List[dict] = []
    seen_titles = set()
    seen_artists = set()

    for track in tracks:
        artist, title = _artist_key(track), _title_key(track)
        if artist not in seen_artists and title not in seen_titles:
            selected.append(track)
            seen_artists.add(artist)
            seen_titles.add(title)

    if len(selected) < target:
        for track in tracks:
            if len(selected) >= target:
                break
            title = _title_key(track)
            if title not in seen_titles:
                selected.append(track)
                seen_titles.add(title)

    rng.shuffle(selected)
    return selected[:target]
