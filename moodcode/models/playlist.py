"""Result of publishing a playlist to SoundCloud."""
from dataclasses import dataclass


@dataclass
class PublishResult:
    """Created playlist as returned by SoundCloud.

    ``degraded`` is True when the JSON request was rejected and the playlist was
    created through the form fallback, which cannot attach tracks.
    """
    playlist: dict
    degraded: bool = False
