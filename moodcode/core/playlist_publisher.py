"""Create the SoundCloud playlist, falling back to the form-encoded request."""
import logging
from typing import Any, Sequence

from moodcode.core.errors import UpstreamError
from moodcode.core.soundcloud_client import SoundCloudClient
from moodcode.models.playlist import PublishResult

logger = logging.getLogger(__name__)


def publish_playlist(
    client: SoundCloudClient,
    token: str,
    title: str,
    description: str,
    track_ids: Sequence[Any],
) -> PublishResult:
    """Create a public playlist with track_ids attached.

    If SoundCloud rejects the JSON request, one form-encoded attempt is made.
    The form request cannot carry tracks, so that playlist is created empty and
    the result is marked degraded. A failure of the fallback propagates.
    """
    try:
        created = client.create_playlist(token, title, description, track_ids)
        return PublishResult(playlist=created, degraded=False)
    except UpstreamError as e:
        logger.warning(
            "Playlist creation failed (status=%s): %s; retrying as form without tracks",
            e.upstream_status,
            e.details,
        )

    created = client.create_playlist_form(token, title, description)
    logger.warning("Playlist %s created without %d track(s)", created.get("id"), len(track_ids))
    return PublishResult(playlist=created, degraded=True)
