"""Formatting rules for amounts and timestamps."""

from __future__ import annotations

import pytest

from finstats import utils

NBSP = "\u00a0"


@pytest.mark.parametrize("amount", [0, 1, 42, 999])
def test_format_compact_below_thousand_is_plain(amount: int) -> None:
    assert utils.format_compact(amount) == str(amount)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(1_000, "1.0K"), (1_250, "1.2K"), (500_000, "500.0K"), (999_949, "999.9K")],
)
def test_format_compact_thousands(amount: int, expected: str) -> None:
    text = utils.format_compact(amount)
    assert text == expected
    assert float(text[:-1]) == round(amount / 1_000, 1)


@pytest.mark.parametrize(("amount", "expected"), [(1_000_000, "1.0M"), (2_000_000, "2.0M"), (15_340_000, "15.3M")])
def test_format_compact_millions(amount: int, expected: str) -> None:
    assert utils.format_compact(amount) == expected


def test_format_compact_none_short_circuits() -> None:
    assert utils.format_compact(None) == "0"


def test_format_full_groups_thousands() -> None:
    assert utils.format_full(1_500_000) == f"1{NBSP}500{NBSP}000"
    assert utils.format_full(999) == "999"
    assert utils.format_full(-25_000) == f"-25{NBSP}000"


def test_format_full_none_matches_zero() -> None:
    assert utils.format_full(None) == utils.format_full(0) == "0"


def test_format_signed() -> None:
    assert utils.format_signed(2_000_000, "income", compact=True) == "+2.0M"
    assert utils.format_signed(500_000, "expense", compact=True) == "-500.0K"
    assert utils.format_signed(12_000, "expense") == f"-12{NBSP}000"


def test_format_date_naive_timestamp() -> None:
    assert utils.format_date("2026-10-05T09:07:00") == "okt 5, 09:07"


def test_format_date_converts_aware_timestamp() -> None:
    assert utils.format_date("2026-01-31T20:30:00Z", "Asia/Tashkent") == "fev 1, 01:30"


def test_format_date_rejects_garbage() -> None:
    with pytest.raises((ValueError, TypeError)):
        utils.format_date("not a date")
