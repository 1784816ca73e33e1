"""
Submission Guard
================

Stops duplicate outbound calls from one form instance:
- In-flight lock: only one submission's remote calls outstanding at a time
- Replay set: a request id admitted once is never admitted again
- Cooldown: a new start must wait SUBMISSION_COOLDOWN_SECONDS after the last one

Design:
- One guard per form session, constructed explicitly and passed to the workflow
- `try_start` checks and starts under a lock so admission is a single
  compare-and-set even when the guard is shared across threads
- `can_submit` / `start` remain available for callers that drive the two
  steps themselves on a single-threaded loop
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional

from leadcapture.config import REQUEST_ID_TTL_SECONDS, SUBMISSION_COOLDOWN_SECONDS
from leadcapture.exceptions import AdmissionRejected

logger = logging.getLogger(__name__)


# Rejection reasons (used in logs and AdmissionRejected)
REASON_IN_FLIGHT = "submission already in progress"
REASON_REPLAYED = "request already processed"
REASON_COOLDOWN = "too soon since last submission"


class SubmissionGuard:
    """
    Admission control for form submissions.

    Args:
        cooldown_seconds: Minimum gap between two admitted starts
        request_id_ttl: Forget admitted ids after this many seconds
            (None = remember until reset)
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        cooldown_seconds: float = SUBMISSION_COOLDOWN_SECONDS,
        request_id_ttl: Optional[float] = REQUEST_ID_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cooldown_seconds = cooldown_seconds
        self.request_id_ttl = request_id_ttl
        self._clock = clock
        self._lock = threading.Lock()

        self._in_flight = False
        self._seen_request_ids: Dict[str, float] = {}  # request_id -> admitted at
        self._last_started_at: Optional[float] = None

    # ============================================================
    # State
    # ============================================================

    @property
    def is_in_flight(self) -> bool:
        return self._in_flight

    @property
    def last_started_at(self) -> Optional[float]:
        return self._last_started_at

    def has_seen(self, request_id: str) -> bool:
        admitted_at = self._seen_request_ids.get(request_id)
        if admitted_at is None:
            return False
        if self.request_id_ttl is None:
            return True
        return self._clock() - admitted_at < self.request_id_ttl

    # ============================================================
    # Admission
    # ============================================================

    def rejection_reason(self, request_id: str) -> Optional[str]:
        """Why `request_id` would be rejected right now, or None if admissible."""
        if self._in_flight:
            return REASON_IN_FLIGHT

        if self.has_seen(request_id):
            return REASON_REPLAYED

        if self._last_started_at is not None:
            elapsed = self._clock() - self._last_started_at
            if elapsed < self.cooldown_seconds:
                return REASON_COOLDOWN

        return None

    def can_submit(self, request_id: str) -> bool:
        """Admission check. Reads state only."""
        reason = self.rejection_reason(request_id)
        if reason is not None:
            logger.debug(f"🛑 Guard: {request_id} not admissible ({reason})")
            return False
        return True

    def start(self, request_id: str) -> None:
        """
        Mark `request_id` as in flight.

        Only call after `can_submit(request_id)` returned True on the same
        thread with no suspension in between. Prefer `try_start`.
        """
        now = self._clock()
        self._prune(now)
        self._in_flight = True
        self._seen_request_ids[request_id] = now
        self._last_started_at = now
        logger.info(f"🔒 Guard: started submission {request_id}")

    def try_start(self, request_id: str) -> bool:
        """Atomically check and start. Returns False if rejected."""
        with self._lock:
            reason = self.rejection_reason(request_id)
            if reason is not None:
                logger.warning(f"🛑 Guard: submission {request_id} blocked ({reason})")
                return False
            self.start(request_id)
            return True

    def start_or_raise(self, request_id: str) -> None:
        """Like `try_start` but raises AdmissionRejected with the reason."""
        with self._lock:
            reason = self.rejection_reason(request_id)
            if reason is not None:
                raise AdmissionRejected(request_id, reason)
            self.start(request_id)

    # ============================================================
    # Release
    # ============================================================

    def end(self, request_id: str) -> None:
        """
        Release the in-flight lock. The id stays in the replay set.

        `request_id` is only logged: the flag is cleared unconditionally, so
        after a `reset()` during a submission, that submission's `end` also
        releases any newer one that started meanwhile.
        """
        with self._lock:
            self._in_flight = False
        logger.info(f"🔓 Guard: ended submission {request_id}")

    def reset(self) -> None:
        """Forget everything (view mount, "submit another")."""
        with self._lock:
            self._in_flight = False
            self._seen_request_ids.clear()
            self._last_started_at = None
        logger.info("🔄 Guard: reset all submission data")

    def _prune(self, now: float) -> None:
        if self.request_id_ttl is None:
            return
        expired = [
            request_id
            for request_id, admitted_at in self._seen_request_ids.items()
            if now - admitted_at >= self.request_id_ttl
        ]
        for request_id in expired:
            del self._seen_request_ids[request_id]
        if expired:
            logger.debug(f"Guard: evicted {len(expired)} expired request ids")
