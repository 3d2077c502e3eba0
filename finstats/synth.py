"""Deterministic sample snapshots.

The generator produces ``/api/stats``-shaped payloads exactly as the server
delivers them: weekly points newest first, category lists sorted by value
descending and transactions newest first. Useful for tests and for looking
at the dashboard without a running API.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import numpy as np

DEFAULT_SEED = 7
DEFAULT_TRANSACTIONS = 40
DEFAULT_OPENING_BALANCE = 3_000_000
DEFAULT_AS_OF = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

WEEKDAY_LABELS = ("Du", "Se", "Ch", "Pa", "Ju", "Sh", "Ya")


@dataclass(frozen=True)
class CategoryProfile:
    """Static description of a spending or earning category."""

    name: str
    flow: str  # "income" or "expense"
    amount_range: tuple[int, int]
    weight: float
    descriptions: tuple[str, ...]


CATALOGUE = (
    CategoryProfile("Oziq-ovqat", "expense", (15_000, 180_000), 0.30, ("Korzinka", "Makro", "Bozor")),
    CategoryProfile("Transport", "expense", (5_000, 60_000), 0.20, ("Yandex Go", "Metro", "Benzin")),
    CategoryProfile("Kommunal", "expense", (50_000, 400_000), 0.06, ("Elektr", "Gaz", "Internet")),
    CategoryProfile("Kafe", "expense", (25_000, 250_000), 0.14, ("Evos", "Oqtepa Lavash", "Kofe")),
    CategoryProfile("Kiyim", "expense", (90_000, 700_000), 0.05, ("Zara", "Bozor")),
    CategoryProfile("Sog'liq", "expense", (20_000, 300_000), 0.05, ("Dorixona", "Klinika")),
    CategoryProfile("Maosh", "income", (3_000_000, 9_000_000), 0.05, ("Oylik maosh",)),
    CategoryProfile("Freelance", "income", (300_000, 2_500_000), 0.07, ("Upwork", "Loyiha to'lovi")),
    CategoryProfile("", "income", (50_000, 500_000), 0.04, ("Qaytarilgan qarz",)),
    CategoryProfile("", "expense", (10_000, 120_000), 0.04, ("Turli xarajat",)),
)


def _round_amount(value: float) -> int:
    return int(round(value / 1_000.0)) * 1_000


def generate_transactions(
    rows: int = DEFAULT_TRANSACTIONS,
    *,
    seed: int = DEFAULT_SEED,
    as_of: datetime | None = None,
) -> list[dict[str, Any]]:
    """Return ``rows`` transactions over the last 30 days, newest first."""

    rng = np.random.default_rng(seed)
    as_of = as_of or DEFAULT_AS_OF
    weights = np.array([profile.weight for profile in CATALOGUE])
    picks = rng.choice(len(CATALOGUE), size=rows, p=weights / weights.sum())
    offsets = np.sort(rng.uniform(0, 30 * 24 * 60, size=rows))

    transactions = []
    for index, minutes in zip(picks, offsets):
        profile = CATALOGUE[int(index)]
        low, high = profile.amount_range
        transactions.append(
            {
                "description": str(rng.choice(profile.descriptions)),
                "amount": _round_amount(rng.uniform(low, high)),
                "type": profile.flow,
                "category": profile.name or None,
                "date": (as_of - timedelta(minutes=int(minutes))).isoformat(),
            }
        )
    return transactions


def _category_totals(transactions: list[dict[str, Any]], flow: str) -> list[dict[str, Any]]:
    totals: dict[str, int] = {}
    for tx in transactions:
        if tx["type"] != flow:
            continue
        label = tx["category"] or ("Daromad" if flow == "income" else "Boshqa")
        totals[label] = totals.get(label, 0) + tx["amount"]
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [{"category": name, "value": value} for name, value in ranked]


def _weekly_points(transactions: list[dict[str, Any]], as_of: datetime) -> list[dict[str, Any]]:
    points = []
    for days_back in range(7):
        day = (as_of - timedelta(days=days_back)).date()
        day_rows = [tx for tx in transactions if datetime.fromisoformat(tx["date"]).date() == day]
        points.append(
            {
                "name": WEEKDAY_LABELS[day.weekday()],
                "income": sum(tx["amount"] for tx in day_rows if tx["type"] == "income"),
                "expense": sum(tx["amount"] for tx in day_rows if tx["type"] == "expense"),
            }
        )
    return points


def generate_snapshot(
    rows: int = DEFAULT_TRANSACTIONS,
    *,
    seed: int = DEFAULT_SEED,
    as_of: datetime | None = None,
) -> dict[str, Any]:
    """Return a raw stats payload in server order (weekly data newest first)."""

    as_of = as_of or DEFAULT_AS_OF
    transactions = generate_transactions(rows, seed=seed, as_of=as_of)
    this_month = [tx for tx in transactions if datetime.fromisoformat(tx["date"]).month == as_of.month]

    income = sum(tx["amount"] for tx in this_month if tx["type"] == "income")
    expense = sum(tx["amount"] for tx in this_month if tx["type"] == "expense")
    net = sum(tx["amount"] if tx["type"] == "income" else -tx["amount"] for tx in transactions)

    return {
        "balance": DEFAULT_OPENING_BALANCE + net,
        "monthlyStats": {"income": income, "expense": expense},
        "weeklyData": _weekly_points(transactions, as_of),
        "recentTransactions": transactions,
        "expensesByCategory": _category_totals(this_month, "expense"),
        "incomesByCategory": _category_totals(this_month, "income"),
    }
