"""Shared fixtures: a scripted stand-in for ``requests.Session``."""

from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from finstats.client import StatsClient


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Replays queued responses (or exceptions) and records every call."""

    def __init__(self) -> None:
        self.queue: list[FakeResponse | Exception] = []
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def add(self, status_code: int = 200, payload: Any = None, *, text: str | None = None) -> None:
        self.queue.append(FakeResponse(status_code, payload, text))

    def fail(self, exc: Exception) -> None:
        self.queue.append(exc)

    def close(self) -> None:
        self.closed = True

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> StatsClient:
    return StatsClient("http://api.test/", session=session)  # type: ignore[arg-type]


@pytest.fixture
def payload() -> dict[str, Any]:
    """A stats body as the server sends it (weekly data newest first)."""

    return {
        "balance": 1_500_000,
        "monthlyStats": {"income": 2_000_000, "expense": 500_000},
        "weeklyData": [
            {"name": "Sun", "income": 0, "expense": 40_000},
            {"name": "Sat", "income": 100_000, "expense": 0},
            {"name": "Mon", "income": 50_000, "expense": 20_000},
        ],
        "recentTransactions": [
            {
                "description": "Oylik maosh",
                "amount": 2_000_000,
                "type": "income",
                "category": "Maosh",
                "date": "2026-10-15T09:30:00",
            },
            {
                "description": "Korzinka",
                "amount": 300_000,
                "type": "expense",
                "category": None,
                "date": "2026-10-14T18:05:00",
            },
        ],
        "expensesByCategory": [
            {"category": "Food", "value": 300_000},
            {"category": "Transport", "value": 150_000},
        ],
        "incomesByCategory": [{"category": "Maosh", "value": 2_000_000}],
    }


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("connection refused")
