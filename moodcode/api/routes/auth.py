"""SoundCloud OAuth: authorization URL with PKCE and token exchange."""
from typing import Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from moodcode.api.state import AppState, get_state
from moodcode.core.auth_flow import build_authorization_url, exchange_token

router = APIRouter()


class TokenRequestBody(BaseModel):
    code: Optional[str] = None
    state: Optional[str] = None


@router.get("/url")
def get_auth_url(state: AppState = Depends(get_state)):
    """Return the SoundCloud authorization URL and the state the client must send back."""
    auth_url, oauth_state = build_authorization_url(
        state.challenge_store, state.client_id, state.redirect_uri
    )
    return {"authUrl": auth_url, "state": oauth_state}


@router.post("/token")
def post_token(
    body: TokenRequestBody | None = Body(None),
    state: AppState = Depends(get_state),
):
    """Exchange code + state for tokens and the user's profile."""
    body = body or TokenRequestBody()
    return exchange_token(state.challenge_store, state.soundcloud, body.code, body.state)
