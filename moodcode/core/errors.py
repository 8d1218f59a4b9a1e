"""Error taxonomy shared by the core services and rendered by the API layer."""
from typing import Any, Optional


class MoodCodeError(Exception):
    """Base error: carries a user-facing message, optional details and an HTTP status."""

    status_code = 500

    def __init__(
        self,
        message: str,
        details: Any = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(MoodCodeError):
    """Required input missing or malformed."""
    status_code = 400


class AuthError(MoodCodeError):
    """Bearer token missing or rejected."""
    status_code = 401


class StateError(MoodCodeError):
    """PKCE state unknown, expired or already consumed."""
    status_code = 400


class NotFoundError(MoodCodeError):
    status_code = 404


class InternalError(MoodCodeError):
    status_code = 500


class UpstreamError(MoodCodeError):
    """SoundCloud rejected a request or could not be reached.

    ``upstream_status`` is None for network failures; ``payload`` is the parsed
    JSON error body when SoundCloud sent one.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        details: Any = None,
        status_code: Optional[int] = None,
        upstream_status: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message, details=details, status_code=status_code)
        self.upstream_status = upstream_status
        self.payload = payload

    @property
    def error_code(self) -> Optional[str]:
        if isinstance(self.payload, dict):
            code = self.payload.get("error")
            return code if isinstance(code, str) else None
        return None

    @property
    def error_description(self) -> Optional[str]:
        if isinstance(self.payload, dict):
            desc = self.payload.get("error_description")
            return desc if isinstance(desc, str) else None
        return None
