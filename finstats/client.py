"""HTTP client for the finance stats API."""

from __future__ import annotations

import logging

import requests

from .errors import MalformedResponse, RequestFailed, TransportError
from .snapshot import StatsSnapshot, parse_snapshot

logger = logging.getLogger(__name__)

STATS_PATH = "/api/stats"
TRANSACTIONS_PATH = "/api/transactions"

FETCH_FAILED_MESSAGE = "Server xatosi"
DELETE_FAILED_MESSAGE = "O'chirishda xatolik"


def _succeeded(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def snapshot_from_payload(payload: object) -> StatsSnapshot:
    """Validate a stats body and reorient its weekly data oldest first."""

    snapshot = parse_snapshot(payload)
    # Server sends newest first; the chart reads left to right.
    snapshot["weeklyData"] = snapshot["weeklyData"][::-1]
    return snapshot


class StatsClient:
    """Talks to ``/api/stats`` and ``/api/transactions`` for one base URL.

    No retries and no client-side timeout unless one is given; the transport
    default applies.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, user_id: int) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s chatId=%s", method, url, user_id)
        try:
            return self.session.request(method, url, params={"chatId": user_id}, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(str(exc)) from exc

    def fetch_stats(self, user_id: int) -> StatsSnapshot:
        """Fetch the stats snapshot with weekly data ordered oldest first."""

        response = self._request("GET", STATS_PATH, user_id)
        if not _succeeded(response):
            logger.warning("Stats request answered %s", response.status_code)
            raise RequestFailed(FETCH_FAILED_MESSAGE, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Stats response is not JSON: {exc}") from exc

        snapshot = snapshot_from_payload(payload)
        logger.info(
            "Loaded stats for chat %s: %d transactions, %d weekly points",
            user_id,
            len(snapshot["recentTransactions"]),
            len(snapshot["weeklyData"]),
        )
        return snapshot

    def delete_all_transactions(self, user_id: int) -> None:
        response = self._request("DELETE", TRANSACTIONS_PATH, user_id)
        if not _succeeded(response):
            logger.warning("Delete request answered %s", response.status_code)
            raise RequestFailed(DELETE_FAILED_MESSAGE, status_code=response.status_code)
        logger.info("Deleted all transactions for chat %s", user_id)

    def close(self) -> None:
        self.session.close()
