"""Configuration: env, SoundCloud credentials, CORS origins, timeouts."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of moodcode package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SOUNDCLOUD_CLIENT_ID etc. are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("MOODCODE_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("MOODCODE_API_PORT", os.getenv("PORT", "3001")))

# "production" switches the allowed CORS origin to the deployed frontend
MOODCODE_ENV = os.getenv("MOODCODE_ENV", "development").lower()
FRONTEND_URL = os.getenv("MOODCODE_FRONTEND_URL", "https://your-frontend-url.vercel.app")
DEV_ORIGIN = os.getenv("MOODCODE_DEV_ORIGIN", "http://localhost:3000")

# SoundCloud (OAuth 2.1 authorization code + PKCE)
SOUNDCLOUD_CLIENT_ID = os.getenv("SOUNDCLOUD_CLIENT_ID", "")
SOUNDCLOUD_CLIENT_SECRET = os.getenv("SOUNDCLOUD_CLIENT_SECRET", "")
SOUNDCLOUD_REDIRECT_URI = os.getenv("SOUNDCLOUD_REDIRECT_URI", "")
SOUNDCLOUD_API_BASE = "https://api.soundcloud.com"
SOUNDCLOUD_AUTHORIZE_URL = "https://soundcloud.com/connect"
SOUNDCLOUD_TOKEN_URL = "https://secure.soundcloud.com/oauth/token"
SOUNDCLOUD_SCOPE = "non-expiring"

# Timeouts (seconds)
TOKEN_TIMEOUT_SEC = 15.0
PROFILE_TIMEOUT_SEC = 10.0
DEFAULT_TIMEOUT_SEC = 30.0

# PKCE challenge records live this long before they can no longer be consumed
PKCE_TTL_SEC = 15 * 60
PKCE_SWEEP_INTERVAL_SEC = 60.0

# Mood playlist
SEARCH_CONCURRENCY = 4
PLAYLIST_TRACK_COUNT = 15


def is_production() -> bool:
    return MOODCODE_ENV == "production"


def allowed_origins() -> list[str]:
    return [FRONTEND_URL] if is_production() else [DEV_ORIGIN]


def soundcloud_settings_status() -> dict[str, bool]:
    """Which SoundCloud settings are present (values are never exposed)."""
    return {
        "SOUNDCLOUD_CLIENT_ID": bool(SOUNDCLOUD_CLIENT_ID),
        "SOUNDCLOUD_CLIENT_SECRET": bool(SOUNDCLOUD_CLIENT_SECRET),
        "SOUNDCLOUD_REDIRECT_URI": bool(SOUNDCLOUD_REDIRECT_URI),
    }
