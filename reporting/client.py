"""
client.py -- HTTP client for the session-tracking backend.

Thin JSON-over-HTTP wrapper around the backend endpoints:

    POST {base}/start        {difficulty, email}        -> {sessionId, credits}
    POST {base}/chest        {sessionId, x, y, value, type}
    POST {base}/bubble       {sessionId, x, y, value}
    POST {base}/mineDeath    {sessionId}
    POST {base}/end          {sessionId, endedEarly, score, seaweedsCollected}
    GET  {base}/game-config?difficulty=...

Every call raises ReportingError on failure. Callers that must never fail
(the game loop) go through SessionReporter, which catches and retries.
"""

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

import config
from game.errors import ReportingError

logger = logging.getLogger(__name__)

USER_AGENT = f"ManateeTreasureHunt/{config.GAME_VERSION}"


class BackendClient:
    """
    Blocking backend client; one instance per game process
    """
    def __init__(self, base_url, timeout=None, start_timeout=None, token=None, email=None, dry_run=False):
        """
        Args:
            base_url: API base, e.g. http://localhost:3000/api
            timeout: Seconds per request (config.REPORT_TIMEOUT_S)
            start_timeout: Seconds for /start (config.START_TIMEOUT_S)
            token: Optional bearer token
            email: Optional player email sent with /start
            dry_run: Send X-Dry-Run so /start does not charge credits
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else config.REPORT_TIMEOUT_S
        self.start_timeout = start_timeout if start_timeout is not None else config.START_TIMEOUT_S
        self.token = token
        self.email = email
        self.dry_run = dry_run

    def _request(self, method, path, payload=None, headers=None, timeout=None):
        """
        Send one request and decode the JSON reply.

        Returns:
            Parsed response dict ({} for an empty body)

        Raises:
            ReportingError: transport failure, non-2xx status, or bad JSON
        """
        url = f"{self.base_url}{path}"
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        req_headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        if data is not None:
            req_headers["Content-Type"] = "application/json"
        if self.token:
            req_headers["Authorization"] = f"Bearer {self.token}"
        if headers:
            req_headers.update(headers)

        req = urllib.request.Request(url, data=data, headers=req_headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=timeout or self.timeout) as resp:
                body = resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")
            raise ReportingError(f"{method} {path} HTTP {e.code}: {detail[:200]}", status=e.code) from e
        except (urllib.error.URLError, OSError) as e:
            raise ReportingError(f"{method} {path} failed: {e}") from e

        if not body:
            return {}
        try:
            result = json.loads(body)
        except ValueError as e:
            raise ReportingError(f"{method} {path} returned invalid JSON") from e
        if not isinstance(result, dict):
            raise ReportingError(f"{method} {path} returned {type(result).__name__}, expected object")
        return result

    # ---------------------------------------------------------------------------
    # Session events
    # ---------------------------------------------------------------------------

    def start(self, difficulty):
        """Open a backend session; returns {sessionId, credits}"""
        headers = {"X-Dry-Run": "1"} if self.dry_run else None
        payload = {"difficulty": difficulty}
        if self.email:
            payload["email"] = self.email
        return self._request("POST", "/start", payload, headers=headers, timeout=self.start_timeout)

    def log_chest(self, session_id, x, y, value, kind):
        return self._request("POST", "/chest", {
            "sessionId": session_id, "x": x, "y": y, "value": value, "type": kind,
        })

    def log_bubble(self, session_id, x, y, value):
        return self._request("POST", "/bubble", {
            "sessionId": session_id, "x": x, "y": y, "value": value,
        })

    def log_mine_death(self, session_id):
        return self._request("POST", "/mineDeath", {"sessionId": session_id})

    def end(self, session_id, ended_early, score, seaweeds_collected):
        return self._request("POST", "/end", {
            "sessionId": session_id,
            "endedEarly": bool(ended_early),
            "score": score,
            "seaweedsCollected": seaweeds_collected,
        })

    # ---------------------------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------------------------

    def fetch_game_config(self, difficulty):
        """Raw per-difficulty config payload (validate with GameConfig.from_dict)"""
        query = urllib.parse.urlencode({"difficulty": difficulty})
        return self._request("GET", f"/game-config?{query}")
