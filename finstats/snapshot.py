"""Snapshot payload types and shape validation."""

from __future__ import annotations

from typing import Any, Literal, Mapping, TypedDict

from .errors import MalformedResponse


class MonthlyStats(TypedDict):
    income: int
    expense: int


class WeeklyPoint(TypedDict):
    name: str
    income: int
    expense: int


class Transaction(TypedDict):
    description: str
    amount: int
    type: Literal["income", "expense"]
    category: str | None
    date: str


class CategoryEntry(TypedDict):
    category: str
    value: int


class StatsSnapshot(TypedDict):
    balance: int
    monthlyStats: MonthlyStats
    weeklyData: list[WeeklyPoint]
    recentTransactions: list[Transaction]
    expensesByCategory: list[CategoryEntry]
    incomesByCategory: list[CategoryEntry]


TRANSACTION_TYPES = ("income", "expense")


def _amount(value: Any, field: str) -> int | float:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(f"{field} must be a number, got {type(value).__name__}")
    return value


def _records(payload: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedResponse(f"{key} must be a list")
    for index, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise MalformedResponse(f"{key}[{index}] must be an object")
    return value


def _categories(payload: Mapping[str, Any], key: str) -> list[CategoryEntry]:
    return [
        {
            "category": str(item.get("category") or ""),
            "value": _amount(item.get("value"), f"{key}[{index}].value"),
        }
        for index, item in enumerate(_records(payload, key))
    ]


def _transactions(payload: Mapping[str, Any]) -> list[Transaction]:
    rows: list[Transaction] = []
    for index, item in enumerate(_records(payload, "recentTransactions")):
        kind = item.get("type")
        if kind not in TRANSACTION_TYPES:
            raise MalformedResponse(f"recentTransactions[{index}].type must be income or expense, got {kind!r}")
        if not item.get("date"):
            raise MalformedResponse(f"recentTransactions[{index}].date is missing")
        rows.append(
            {
                "description": str(item.get("description") or ""),
                "amount": _amount(item.get("amount"), f"recentTransactions[{index}].amount"),
                "type": kind,
                "category": item.get("category") or None,
                "date": str(item["date"]),
            }
        )
    return rows


def parse_snapshot(payload: Any) -> StatsSnapshot:
    """Validate a decoded ``/api/stats`` body and return a fresh snapshot.

    Every list is rebuilt, so the caller never shares structure with the raw
    payload. Weekly data keeps the server order (newest first); reorienting
    it for the chart is the client's job.
    """

    if not isinstance(payload, Mapping):
        raise MalformedResponse("stats payload must be a JSON object")

    monthly = payload.get("monthlyStats") or {}
    if not isinstance(monthly, Mapping):
        raise MalformedResponse("monthlyStats must be an object")

    weekly: list[WeeklyPoint] = [
        {
            "name": str(item.get("name") or ""),
            "income": _amount(item.get("income"), f"weeklyData[{index}].income"),
            "expense": _amount(item.get("expense"), f"weeklyData[{index}].expense"),
        }
        for index, item in enumerate(_records(payload, "weeklyData"))
    ]

    return {
        "balance": _amount(payload.get("balance"), "balance"),
        "monthlyStats": {
            "income": _amount(monthly.get("income"), "monthlyStats.income"),
            "expense": _amount(monthly.get("expense"), "monthlyStats.expense"),
        },
        "weeklyData": weekly,
        "recentTransactions": _transactions(payload),
        "expensesByCategory": _categories(payload, "expensesByCategory"),
        "incomesByCategory": _categories(payload, "incomesByCategory"),
    }
