"""Shared formatting utilities for the stats dashboard."""

from __future__ import annotations

from typing import Iterable, Literal, Mapping

import pandas as pd

CURRENCY = "UZS"

# uz-UZ groups thousands with a no-break space
GROUP_SEPARATOR = "\u00a0"

MONTH_ABBREVIATIONS = (
    "yan",
    "fev",
    "mar",
    "apr",
    "may",
    "iyn",
    "iyl",
    "avg",
    "sen",
    "okt",
    "noy",
    "dek",
)


def ensure_dataframe(records: Iterable[Mapping] | pd.DataFrame) -> pd.DataFrame:
    """Ensure the input payload is normalised to a :class:`pandas.DataFrame`."""

    if isinstance(records, pd.DataFrame):
        return records.copy()

    return pd.DataFrame(list(records))


def format_compact(amount: float | None) -> str:
    """Abbreviate an amount with K/M suffixes, e.g. ``2_000_000 -> "2.0M"``."""

    if amount is None:
        return "0"
    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"{amount / 1_000:.1f}K"
    return str(int(amount))


def format_full(amount: float | None) -> str:
    """Return the amount with locale thousands grouping, ``None`` reads as 0."""

    value = int(round(amount or 0))
    return f"{value:,}".replace(",", GROUP_SEPARATOR)


def format_signed(amount: float | None, kind: Literal["income", "expense"], *, compact: bool = False) -> str:
    sign = "+" if kind == "income" else "-"
    body = format_compact(amount) if compact else format_full(amount)
    return f"{sign}{body}"


def format_date(timestamp: str, tz: str | None = None) -> str:
    """Render an ISO timestamp as ``"okt 18, 14:05"``.

    Timezone-aware timestamps are shifted into ``tz`` when given; naive ones
    are shown as delivered.
    """

    ts = pd.to_datetime(timestamp)
    if tz and ts.tzinfo is not None:
        ts = ts.tz_convert(tz)
    return f"{MONTH_ABBREVIATIONS[ts.month - 1]} {ts.day}, {ts.hour:02d}:{ts.minute:02d}"
