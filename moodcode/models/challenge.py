"""PKCE challenge record held between the authorization redirect and the token exchange."""
from dataclasses import dataclass


@dataclass(frozen=True)
class ChallengeRecord:
    state: str
    verifier: str
    challenge: str
    created_at: float  # epoch seconds
