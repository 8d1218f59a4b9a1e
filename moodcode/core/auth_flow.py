"""SoundCloud OAuth: authorization URL with PKCE, and code-for-token exchange."""
import logging
import urllib.parse
from typing import Tuple

from moodcode.config import SOUNDCLOUD_AUTHORIZE_URL, SOUNDCLOUD_SCOPE
from moodcode.core.challenge_store import ChallengeStore
from moodcode.core.errors import InternalError, StateError, UpstreamError, ValidationError
from moodcode.core.pkce import derive_challenge, new_state, new_verifier
from moodcode.core.soundcloud_client import SoundCloudClient

logger = logging.getLogger(__name__)

# SoundCloud OAuth error codes -> message shown to the user
_TOKEN_ERROR_MESSAGES = {
    "invalid_grant": "Authorization code expired. Please try again.",
    "invalid_client": "Invalid client credentials.",
}
TOKEN_EXCHANGE_FAILED = "Failed to exchange code for token"


def build_authorization_url(
    store: ChallengeStore,
    client_id: str,
    redirect_uri: str,
) -> Tuple[str, str]:
    """Register a fresh PKCE pair under a new state and return (auth_url, state)."""
    if not client_id or not redirect_uri:
        raise InternalError("SoundCloud client is not configured")
    verifier = new_verifier()
    challenge = derive_challenge(verifier)
    state = new_state()
    store.put(state, verifier, challenge)
    store.evict_expired()

    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": SOUNDCLOUD_SCOPE,
        "code_challenge": challenge,
        "code_challenge_method": "S256",
        "state": state,
    }
    query = urllib.parse.urlencode(params, quote_via=urllib.parse.quote)
    return f"{SOUNDCLOUD_AUTHORIZE_URL}?{query}", state


def _token_error(e: UpstreamError) -> UpstreamError:
    """Map a failed token/profile call to a stable user-facing error."""
    code = e.error_code
    message = _TOKEN_ERROR_MESSAGES.get(code or "", TOKEN_EXCHANGE_FAILED)
    if code and e.error_description:
        details = f"{code}: {e.error_description}"
    elif code:
        details = code
    else:
        details = e.details if isinstance(e.details, str) else e.message
    return UpstreamError(
        message,
        details=details,
        status_code=e.upstream_status or 500,
        upstream_status=e.upstream_status,
        payload=e.payload,
    )


def exchange_token(
    store: ChallengeStore,
    client: SoundCloudClient,
    code: str | None,
    state: str | None,
) -> dict:
    """Consume the state's challenge, trade code+verifier for tokens, then fetch the user.

    The state is spent before any network call, so a failed exchange can only be
    retried by starting a new authorization.
    """
    if not code or not state:
        raise ValidationError("Authorization code and state are required")

    record = store.consume(state)
    if record is None:
        raise StateError("State parameter already used or expired")

    try:
        tokens = client.exchange_code(code, record.verifier)
        access_token = tokens.get("access_token")
        if not access_token:
            raise UpstreamError(
                "SoundCloud token response had no access_token",
                details="missing access_token",
            )
        user = client.get_me(access_token)
    except UpstreamError as e:
        logger.error(
            "Token exchange error: status=%s detail=%s",
            e.upstream_status,
            e.payload if e.payload is not None else e.details,
        )
        raise _token_error(e) from e

    return {
        "access_token": access_token,
        "refresh_token": tokens.get("refresh_token"),
        "expires_in": tokens.get("expires_in"),
        "user": user,
    }
