"""
reporter.py -- Fire-and-forget session event reporting.

The game loop calls start/log_*/end and returns immediately. Each call is
mirrored into the local SessionLedger and, for SessionReporter, appended
to a bounded deque that a daemon thread drains in order. Because a single
worker sends in enqueue order, /start has resolved (and the session id is
known) before any later event of the same session is sent.

Failures are logged, retried a few times, then dropped. Nothing here ever
raises into the caller.
"""

import collections
import logging
import threading

import config
from game.errors import ReportingError
from reporting.ledger import SessionLedger

logger = logging.getLogger(__name__)


class ReportEvent:
    """One queued backend call"""
    __slots__ = ("kind", "payload", "attempts")

    def __init__(self, kind, payload):
        self.kind = kind
        self.payload = payload
        self.attempts = 0

    def __repr__(self):
        return f"ReportEvent({self.kind}, attempts={self.attempts})"


class NullReporter:
    """
    Offline reporter: keeps the local ledger, sends nothing
    """
    def __init__(self, ledger=None, grace_seconds=None):
        self.ledger = ledger or SessionLedger()
        self.grace_seconds = grace_seconds if grace_seconds is not None else config.GRACE_SECONDS
        self.session_id = None
        self.credits = None

    def _submit(self, kind, payload):
        """Hand an event to the transport; offline there is none"""

    def start(self, difficulty):
        self.ledger.start()
        self._submit("start", {"difficulty": difficulty})

    def log_chest(self, x, y, value, kind):
        self.ledger.record_chest(x, y, value, kind)
        self._submit("chest", {"x": x, "y": y, "value": value, "kind": kind})

    def log_bubble(self, x, y, value):
        self.ledger.record_bubble(x, y, value)
        self._submit("bubble", {"x": x, "y": y, "value": value})

    def log_mine_death(self):
        self.ledger.record_mine_death()
        self._submit("mine_death", {})

    def end(self, ended_early, score, seaweeds_collected):
        self.ledger.end()
        self._submit("end", {
            "ended_early": ended_early,
            "score": score,
            "seaweeds_collected": seaweeds_collected,
        })

    def is_within_grace(self):
        """Would the backend refund this session if it ended now"""
        return self.ledger.is_within_grace(self.grace_seconds)

    def flush(self, timeout=None):
        return True

    def close(self, timeout=None):
        pass


class SessionReporter(NullReporter):
    """
    Sends events to the backend from a daemon worker thread
    """
    def __init__(self, client, ledger=None, max_attempts=None, queue_size=None,
                 grace_seconds=None, retry_delay=0.5):
        """
        Args:
            client: BackendClient
            ledger: SessionLedger mirror (a fresh one by default)
            max_attempts: Sends per event before dropping it
            queue_size: Oldest events are dropped beyond this
            grace_seconds: Refund window mirrored from the backend
            retry_delay: Seconds to wait before resending, times attempts
        """
        super().__init__(ledger, grace_seconds)
        self.client = client
        self.max_attempts = max_attempts or config.REPORT_MAX_ATTEMPTS
        self.retry_delay = retry_delay
        self._queue = collections.deque(maxlen=queue_size or config.REPORT_QUEUE_SIZE)
        self._cond = threading.Condition()
        self._in_flight = 0
        self._stopping = False
        self._thread = None

    # ---------------------------------------------------------------------------
    # Producer side (game thread)
    # ---------------------------------------------------------------------------

    def _submit(self, kind, payload):
        with self._cond:
            if len(self._queue) == self._queue.maxlen:
                logger.warning("Report queue full, dropping oldest event")
            self._queue.append(ReportEvent(kind, payload))
            self._cond.notify_all()
        self._ensure_worker()

    def _ensure_worker(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stopping = False
        self._thread = threading.Thread(target=self._worker_loop, daemon=True, name="session-reporter")
        self._thread.start()

    def flush(self, timeout=None):
        """
        Wait until every queued event was sent or dropped.

        Returns:
            True if the queue drained within the timeout
        """
        with self._cond:
            return self._cond.wait_for(lambda: not self._queue and self._in_flight == 0, timeout)

    def close(self, timeout=2.0):
        """Flush what we can, then stop the worker"""
        self.flush(timeout)
        with self._cond:
            self._stopping = True
            self._cond.notify_all()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    # ---------------------------------------------------------------------------
    # Worker side
    # ---------------------------------------------------------------------------

    def _worker_loop(self):
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._queue or self._stopping)
                if self._stopping and not self._queue:
                    return
                event = self._queue.popleft()
                self._in_flight += 1

            retry = False
            try:
                self._send(event)
            except ReportingError as e:
                event.attempts += 1
                if e.status is not None and 400 <= e.status < 500:
                    logger.warning("Backend rejected %s: %s", event.kind, e)
                elif event.attempts < self.max_attempts:
                    logger.warning("Report %s failed (attempt %d/%d): %s",
                                   event.kind, event.attempts, self.max_attempts, e)
                    retry = True
                else:
                    logger.warning("Dropping %s after %d attempts: %s", event.kind, event.attempts, e)
            except Exception:
                logger.exception("Unexpected error sending %s, dropping it", event.kind)

            with self._cond:
                if retry:
                    # back at the front so later events keep their order
                    self._queue.appendleft(event)
                self._in_flight -= 1
                self._cond.notify_all()
                if retry:
                    self._cond.wait(self.retry_delay * event.attempts)

    def _send(self, event):
        """Perform one backend call for a queued event"""
        p = event.payload
        if event.kind == "start":
            self.session_id = None
            result = self.client.start(p["difficulty"])
            self.session_id = result.get("sessionId")
            if "credits" in result:
                self.credits = result["credits"]
            logger.info("Backend session %s started (credits=%s)", self.session_id, self.credits)
            return

        if self.session_id is None:
            logger.debug("No backend session, skipping %s", event.kind)
            return

        if event.kind == "chest":
            self.client.log_chest(self.session_id, p["x"], p["y"], p["value"], p["kind"])
        elif event.kind == "bubble":
            self.client.log_bubble(self.session_id, p["x"], p["y"], p["value"])
        elif event.kind == "mine_death":
            self.client.log_mine_death(self.session_id)
        elif event.kind == "end":
            result = self.client.end(self.session_id, p["ended_early"], p["score"], p["seaweeds_collected"])
            if "credits" in result:
                self.credits = result["credits"]
            if result.get("refunded"):
                logger.info("Session %s ended inside the grace window and was refunded", self.session_id)
        else:
            raise ValueError(f"unknown report event: {event.kind}")
