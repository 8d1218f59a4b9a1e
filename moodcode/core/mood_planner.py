"""Mood -> SoundCloud search terms, from fixed genre/energy/valence tables."""
import random
from typing import Dict, List, Optional, Tuple

from moodcode.models.mood import MoodProfile

MAX_SEARCH_TERMS = 10
# Unrecognised moods use this profile
FALLBACK_MOOD = "satisfied"

MOOD_PROFILES: Dict[str, MoodProfile] = {
    "frustrated": MoodProfile(
        genres=("hip hop", "rap", "rock", "metal"),
        energy="high",
        valence="negative",
    ),
    "excited": MoodProfile(
        genres=("pop", "electronic", "dance", "hip hop"),
        energy="high",
        valence="positive",
    ),
    "satisfied": MoodProfile(
        genres=("r&b", "soul", "indie", "alternative"),
        energy="medium",
        valence="positive",
    ),
    "tired": MoodProfile(
        genres=("indie", "alternative", "ambient", "lo-fi"),
        energy="low",
        valence="neutral",
    ),
    "euphoric": MoodProfile(
        genres=("pop", "hip hop", "funk", "soul"),
        energy="very high",
        valence="very positive",
    ),
}

GENRE_ARTISTS: Dict[str, Tuple[str, ...]] = {
    "hip hop": ("drake", "kendrick lamar", "j cole", "travis scott"),
    "rap": ("eminem", "kanye west", "jay z", "nas"),
    "pop": ("taylor swift", "dua lipa", "ariana grande", "the weeknd"),
    "r&b": ("sza", "frank ocean", "the weeknd", "bryson tiller"),
    "soul": ("alicia keys", "john legend", "anderson paak", "h.e.r"),
    "electronic": ("calvin harris", "deadmau5", "skrillex"),
    "indie": ("mac miller", "rex orange county", "clairo"),
    "alternative": ("lana del rey", "arctic monkeys", "tame impala"),
    "ambient": ("bon iver", "cigarettes after sex", "beach house"),
    "lo-fi": ("joji", "keshi", "88rising collective"),
}

MODIFIERS = ("trending", "popular", "latest", "hits", "best")


def resolve_profile(mood: str) -> MoodProfile:
    """Profile for mood; unknown moods always resolve to the 'satisfied' profile."""
    return MOOD_PROFILES.get(mood, MOOD_PROFILES[FALLBACK_MOOD])


def candidate_terms(mood: str, modifier: str) -> List[str]:
    """All terms for mood in generation order, deduplicated, before shuffling."""
    profile = resolve_profile(mood)
    terms = []
    for genre in profile.genres:
        terms.append(f"{genre} {profile.valence}")
        terms.append(f"{genre} {profile.energy} energy")
        for artist in GENRE_ARTISTS.get(genre, ())[:2]:
            terms.append(f"{artist} {genre}")
    terms.append(f"{mood} coding music")
    terms.append(f"{profile.valence} {profile.energy} music")
    terms.append(f"{modifier} {profile.genres[0]}")
    # dict keeps first occurrence order
    return list(dict.fromkeys(terms))


def plan_search_terms(mood: str, rng: Optional[random.Random] = None) -> List[str]:
    """Up to MAX_SEARCH_TERMS distinct search terms for mood, in random order.

    The modifier choice and the shuffle are the only random steps; both draw
    from rng so a seeded generator reproduces the plan. Variety, not fairness,
    is the goal.
    """
    rng = rng or random.Random()
    terms = candidate_terms(mood, rng.choice(MODIFIERS))
    rng.shuffle(terms)
    return terms[:MAX_SEARCH_TERMS]
