"""SoundCloud HTTP API client via requests; every failure surfaces as UpstreamError."""
import logging
import threading
from typing import Any, Iterable, List, Optional

import requests

from moodcode.config import (
    DEFAULT_TIMEOUT_SEC,
    PROFILE_TIMEOUT_SEC,
    SOUNDCLOUD_API_BASE,
    SOUNDCLOUD_TOKEN_URL,
    TOKEN_TIMEOUT_SEC,
)
from moodcode.core.errors import UpstreamError

logger = logging.getLogger(__name__)


def _error_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class SoundCloudClient:
    """Thin wrapper over the SoundCloud endpoints this service relays.

    Credentials are only used by ``exchange_code``; all other calls act on
    behalf of the user whose bearer token is passed in.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        session: Optional[requests.Session] = None,
        api_base: str = SOUNDCLOUD_API_BASE,
        token_url: str = SOUNDCLOUD_TOKEN_URL,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.api_base = api_base.rstrip("/")
        self.token_url = token_url
        # Session objects are not thread-safe; without an injected session each
        # thread (request workers and the search pool) gets its own
        self._session = session
        self._local = threading.local()

    def _get_session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _request(self, method: str, url: str, **kwargs) -> Any:
        kwargs.setdefault("timeout", DEFAULT_TIMEOUT_SEC)
        try:
            response = self._get_session().request(method, url, **kwargs)
        except requests.RequestException as e:
            raise UpstreamError(
                "SoundCloud request failed",
                details=str(e),
            ) from e
        if not response.ok:
            payload = _error_payload(response)
            raise UpstreamError(
                f"SoundCloud returned HTTP {response.status_code}",
                details=payload,
                upstream_status=response.status_code,
                payload=payload,
            )
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                "SoundCloud returned a non-JSON response",
                details=response.text[:200],
                upstream_status=response.status_code,
            ) from e

    @staticmethod
    def _bearer(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    def exchange_code(self, code: str, verifier: str) -> dict:
        """authorization_code grant with the PKCE verifier. Returns the token payload."""
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
            "code": code,
            "code_verifier": verifier,
        }
        return self._request(
            "POST",
            self.token_url,
            data=data,
            headers={"Accept": "application/json; charset=utf-8"},
            timeout=TOKEN_TIMEOUT_SEC,
        )

    def get_me(self, token: str, timeout: float = PROFILE_TIMEOUT_SEC) -> dict:
        """Profile of the user owning token."""
        return self._request(
            "GET",
            f"{self.api_base}/me",
            headers=self._bearer(token),
            timeout=timeout,
        )

    def search_tracks(
        self,
        token: str,
        q: str,
        limit: int = 20,
        offset: Optional[int] = None,
        min_duration_ms: Optional[int] = None,
    ) -> List[dict]:
        """Streamable tracks matching q."""
        params: dict = {"q": q, "limit": limit, "streamable": "true"}
        if offset is not None:
            params["offset"] = offset
        if min_duration_ms is not None:
            params["duration[from]"] = min_duration_ms
        data = self._request(
            "GET",
            f"{self.api_base}/tracks",
            params=params,
            headers=self._bearer(token),
        )
        # Linked-partitioning responses wrap the list in "collection"
        if isinstance(data, dict):
            data = data.get("collection") or []
        return list(data)

    def create_playlist(
        self,
        token: str,
        title: str,
        description: str,
        track_ids: Iterable[Any],
    ) -> dict:
        """Create a public playlist with tracks attached (JSON body)."""
        body = {
            "playlist": {
                "title": title,
                "description": description,
                "sharing": "public",
                "tracks": [{"id": str(track_id)} for track_id in track_ids],
            }
        }
        return self._request(
            "POST",
            f"{self.api_base}/playlists",
            json=body,
            headers=self._bearer(token),
        )

    def create_playlist_form(self, token: str, title: str, description: str) -> dict:
        """Create an empty public playlist (form-encoded body; no tracks)."""
        data = {
            "playlist[title]": title,
            "playlist[description]": description,
            "playlist[sharing]": "public",
        }
        return self._request(
            "POST",
            f"{self.api_base}/playlists",
            data=data,
            headers=self._bearer(token),
        )
