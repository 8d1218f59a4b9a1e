"""SoundCloud calls on behalf of the user: profile, search, mood playlist."""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header
from pydantic import BaseModel, ConfigDict, Field

from moodcode.api.state import AppState, get_state
from moodcode.core.errors import AuthError, UpstreamError, ValidationError
from moodcode.core.mood_playlist import generate_mood_playlist

logger = logging.getLogger(__name__)

router = APIRouter()


def bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Token from 'Authorization: Bearer <token>', or None."""
    if not authorization:
        return None
    token = authorization.replace("Bearer ", "", 1).strip()
    return token or None


def _require(token: Optional[str]) -> str:
    if not token:
        raise AuthError("Access token required")
    return token


class PlaylistBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mood: Optional[str] = None
    analysis_data: Any = Field(None, alias="analysisData")


@router.get("/me")
def get_me(
    token: Optional[str] = Depends(bearer_token),
    state: AppState = Depends(get_state),
):
    """Profile of the token's owner."""
    token = _require(token)
    try:
        user = state.soundcloud.get_me(token)
    except UpstreamError as e:
        logger.error("Get user error: %s", e.details)
        raise UpstreamError("Failed to get user info", upstream_status=e.upstream_status) from e
    return {"user": user}


@router.get("/search")
def search(
    q: Optional[str] = None,
    limit: int = 20,
    token: Optional[str] = Depends(bearer_token),
    state: AppState = Depends(get_state),
):
    """Streamable tracks matching q."""
    if not q:
        raise ValidationError("Search query is required")
    token = _require(token)
    try:
        tracks = state.soundcloud.search_tracks(token, q, limit=limit)
    except UpstreamError as e:
        logger.error("Search error: %s", e.details)
        raise UpstreamError("Failed to search tracks", upstream_status=e.upstream_status) from e
    return {"tracks": tracks}


@router.post("/playlist")
def create_playlist(
    body: PlaylistBody | None = Body(None),
    token: Optional[str] = Depends(bearer_token),
    state: AppState = Depends(get_state),
):
    """Search tracks for a mood and publish them as a new playlist."""
    token = _require(token)
    body = body or PlaylistBody()
    if not body.mood:
        raise ValidationError("Mood is required")
    try:
        playlist = generate_mood_playlist(
            state.soundcloud,
            token,
            body.mood,
            analysis_data=body.analysis_data,
            rng=state.rng,
        )
    except UpstreamError as e:
        logger.error("Playlist creation error: %s", e.details)
        raise UpstreamError(
            "Failed to create playlist",
            details=e.details,
            upstream_status=e.upstream_status,
        ) from e
    return {"playlist": playlist}
