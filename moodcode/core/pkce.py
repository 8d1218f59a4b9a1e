"""PKCE verifier/challenge pair and OAuth state generation (RFC 7636, S256)."""
import base64
import hashlib
import secrets

VERIFIER_BYTES = 32
STATE_BYTES = 16


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def new_verifier() -> str:
    """43-character URL-safe verifier from 32 random bytes."""
    return _b64url(secrets.token_bytes(VERIFIER_BYTES))


def derive_challenge(verifier: str) -> str:
    """S256 challenge: base64url(sha256(verifier)) without padding."""
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return _b64url(digest)


def new_state() -> str:
    """Opaque lookup key for the challenge store."""
    return secrets.token_hex(STATE_BYTES)
