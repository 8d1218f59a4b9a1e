"""Mood profile: genres plus energy/valence labels used to build search terms."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class MoodProfile:
    genres: Tuple[str, ...]
    energy: str  # "low" | "medium" | "high" | "very high"
    valence: str  # "negative" | "neutral" | "positive" | "very positive"
