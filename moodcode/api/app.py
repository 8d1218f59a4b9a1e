"""FastAPI app, CORS, error handlers and route registration."""
import logging
import threading
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from moodcode.api.state import AppState, get_state
from moodcode.config import (
    PKCE_SWEEP_INTERVAL_SEC,
    allowed_origins,
    is_production,
    soundcloud_settings_status,
)
from moodcode.core.challenge_store import ChallengeStore
from moodcode.core.errors import MoodCodeError

# Import routes after state to avoid circular imports
from moodcode.api.routes import auth, soundcloud

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)

_state = get_state()


def _pkce_sweep_loop(
    store: ChallengeStore,
    stop_event: threading.Event,
    interval_sec: float = PKCE_SWEEP_INTERVAL_SEC,
) -> None:
    """Background loop: drop expired PKCE challenges every interval."""
    while not stop_event.wait(timeout=interval_sec):
        try:
            store.evict_expired()
        except Exception as e:
            logger.warning("PKCE sweep: %s", e)


def log_config_status() -> bool:
    """Log which SoundCloud settings are present. Returns True if all are set."""
    status = soundcloud_settings_status()
    for name, present in status.items():
        if present:
            logger.info("%s: set", name)
        else:
            logger.error("%s: missing", name)
    return all(status.values())


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not log_config_status() and is_production():
        raise RuntimeError("SoundCloud settings missing; refusing to start in production")

    _sweep_stop = threading.Event()
    _sweep_thread = threading.Thread(
        target=_pkce_sweep_loop,
        args=(_state.challenge_store, _sweep_stop),
        daemon=True,
    )
    _sweep_thread.start()
    logger.info("PKCE sweep thread started (interval %.0fs)", PKCE_SWEEP_INTERVAL_SEC)

    yield

    _sweep_stop.set()
    _sweep_thread.join(timeout=5.0)


app = FastAPI(
    title="MoodCode API",
    description="SoundCloud OAuth relay and mood playlist generator",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MoodCodeError)
async def moodcode_error_handler(request: Request, exc: MoodCodeError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/health")
def health():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


app.include_router(auth.router, prefix="/auth/soundcloud", tags=["auth"])
app.include_router(soundcloud.router, prefix="/api/soundcloud", tags=["soundcloud"])
