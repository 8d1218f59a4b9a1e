"""In-memory PKCE challenge store keyed by OAuth state, with 15-minute expiry."""
import logging
import threading
import time
from typing import Callable, Dict, Optional

from moodcode.config import PKCE_TTL_SEC
from moodcode.models.challenge import ChallengeRecord

logger = logging.getLogger(__name__)


class ChallengeStore:
    """Process-local map of state -> ChallengeRecord.

    Each record is either consumed once or expires; both are terminal. One lock
    guards the map so sweeps never interleave with put/consume.
    """

    def __init__(
        self,
        ttl_sec: float = PKCE_TTL_SEC,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl_sec = ttl_sec
        self._clock = clock
        self._records: Dict[str, ChallengeRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def put(self, state: str, verifier: str, challenge: str) -> ChallengeRecord:
        """Insert a record created now. State uniqueness is the caller's job."""
        record = ChallengeRecord(
            state=state,
            verifier=verifier,
            challenge=challenge,
            created_at=self._clock(),
        )
        with self._lock:
            self._records[state] = record
        return record

    def consume(self, state: str) -> Optional[ChallengeRecord]:
        """Remove and return the record for state, or None if absent, used or expired."""
        now = self._clock()
        with self._lock:
            record = self._records.pop(state, None)
        if record is None or self._is_expired(record, now):
            return None
        return record

    def evict_expired(self, now: Optional[float] = None) -> int:
        """Drop every record older than the TTL. Returns how many were removed."""
        if now is None:
            now = self._clock()
        with self._lock:
            expired = [s for s, r in self._records.items() if self._is_expired(r, now)]
            for state in expired:
                del self._records[state]
        if expired:
            logger.debug("Evicted %d expired PKCE challenge(s)", len(expired))
        return len(expired)

    def _is_expired(self, record: ChallengeRecord, now: float) -> bool:
        return now - record.created_at > self._ttl_sec
