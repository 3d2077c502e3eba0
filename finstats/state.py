"""View state for the dashboard and the views derived from it.

One :class:`DashboardController` lives per session. It owns a single
:class:`ViewState`, mutated only by ``initialize``/``confirm_delete`` and the
tab and dialog toggles. Views are recomputed from the state on every render
and never stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

import numpy as np

from . import utils
from .client import StatsClient
from .errors import DashboardError
from .snapshot import CategoryEntry, StatsSnapshot, Transaction, WeeklyPoint

logger = logging.getLogger(__name__)

EMPTY_HISTORY_PLACEHOLDER = "Hozircha ma'lumot yo'q"
DEFAULT_CATEGORY_LABELS = {"income": "Daromad", "expense": "Boshqa"}


class Status(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Tab(str, Enum):
    OVERVIEW = "overview"
    HISTORY = "history"


@dataclass
class ViewState:
    snapshot: StatsSnapshot | None = None
    status: Status = Status.LOADING
    error_message: str | None = None
    active_tab: Tab = Tab.OVERVIEW
    delete_confirmation_open: bool = False
    notice: str | None = None


@dataclass(frozen=True)
class CategoryBar:
    category: str
    value: float
    percent: int


@dataclass(frozen=True)
class OverviewView:
    balance: float
    monthly_income: float
    monthly_expense: float
    weekly: list[WeeklyPoint]
    income_bars: list[CategoryBar]
    expense_bars: list[CategoryBar]
    expense_breakdown: list[CategoryEntry]

    @property
    def balance_text(self) -> str:
        return utils.format_full(self.balance)

    @property
    def income_text(self) -> str:
        return utils.format_signed(self.monthly_income, "income", compact=True)

    @property
    def expense_text(self) -> str:
        return utils.format_signed(self.monthly_expense, "expense", compact=True)


@dataclass(frozen=True)
class TransactionRow:
    description: str
    kind: str
    amount_text: str
    date_text: str
    category_label: str


@dataclass(frozen=True)
class HistoryView:
    rows: list[TransactionRow] = field(default_factory=list)
    placeholder: str = EMPTY_HISTORY_PLACEHOLDER

    @property
    def is_empty(self) -> bool:
        return not self.rows


def category_bars(entries: Sequence[CategoryEntry]) -> list[CategoryBar]:
    """Bar widths relative to the first entry, which the server sorts largest."""

    if not entries:
        return []
    values = np.array([float(entry["value"]) for entry in entries])
    top = values[0]
    if top > 0:
        percents = np.floor(values / top * 100 + 0.5).astype(int)
    else:
        percents = np.zeros(len(values), dtype=int)
    return [
        CategoryBar(category=entry["category"], value=entry["value"], percent=int(percent))
        for entry, percent in zip(entries, percents)
    ]


def transaction_row(tx: Transaction, tz: str | None = None) -> TransactionRow:
    kind = tx["type"]
    return TransactionRow(
        description=tx["description"],
        kind=kind,
        amount_text=utils.format_signed(tx["amount"], kind),
        date_text=utils.format_date(tx["date"], tz),
        category_label=tx.get("category") or DEFAULT_CATEGORY_LABELS[kind],
    )


class DashboardController:
    """Drives the fetch state machine and the user-facing toggles."""

    def __init__(self, client: StatsClient, user_id: int, *, timezone: str | None = None) -> None:
        self.client = client
        self.user_id = user_id
        self.timezone = timezone
        self.state = ViewState()
        self._generation = 0
        self._torn_down = False

    def _is_stale(self, generation: int) -> bool:
        return self._torn_down or generation != self._generation

    def initialize(self) -> ViewState:
        """Start a fetch cycle: ``loading`` then ``ready`` or ``error``."""

        if self._torn_down:
            logger.debug("initialize() after teardown ignored")
            return self.state

        self._generation += 1
        generation = self._generation
        self.state.snapshot = None
        self.state.status = Status.LOADING
        self.state.error_message = None

        try:
            snapshot = self.client.fetch_stats(self.user_id)
        except DashboardError as exc:
            if self._is_stale(generation):
                logger.debug("Discarding failed fetch from a superseded cycle")
                return self.state
            logger.error("Loading stats for chat %s failed: %s", self.user_id, exc)
            self.state.status = Status.ERROR
            self.state.error_message = str(exc)
            return self.state

        if self._is_stale(generation):
            logger.debug("Discarding stats fetched for a superseded cycle")
            return self.state
        self.state.snapshot = snapshot
        self.state.status = Status.READY
        return self.state

    def teardown(self) -> None:
        """Stop applying results and release the transport; any fetch still in flight is dropped."""

        self._torn_down = True
        self.client.close()

    def select_tab(self, tab: Tab | str) -> None:
        self.state.active_tab = Tab(tab)

    def request_delete(self) -> None:
        self.state.delete_confirmation_open = True

    def cancel_delete(self) -> None:
        self.state.delete_confirmation_open = False

    def dismiss_notice(self) -> None:
        self.state.notice = None

    def confirm_delete(self) -> ViewState:
        """Delete every transaction, then start over from an empty session.

        On failure the current snapshot stays on screen and the error is kept
        in ``notice`` for the user; the dialog closes either way.
        """

        try:
            self.client.delete_all_transactions(self.user_id)
        except DashboardError as exc:
            logger.error("Deleting transactions for chat %s failed: %s", self.user_id, exc)
            self.state.delete_confirmation_open = False
            self.state.notice = str(exc)
            return self.state

        self.state = ViewState()
        return self.initialize()

    def overview(self) -> OverviewView | None:
        snapshot = self.state.snapshot
        if snapshot is None:
            return None
        monthly = snapshot["monthlyStats"]
        return OverviewView(
            balance=snapshot["balance"],
            monthly_income=monthly["income"],
            monthly_expense=monthly["expense"],
            weekly=snapshot["weeklyData"],
            income_bars=category_bars(snapshot["incomesByCategory"]),
            expense_bars=category_bars(snapshot["expensesByCategory"]),
            expense_breakdown=snapshot["expensesByCategory"],
        )

    def history(self) -> HistoryView | None:
        snapshot = self.state.snapshot
        if snapshot is None:
            return None
        return HistoryView(rows=[transaction_row(tx, self.timezone) for tx in snapshot["recentTransactions"]])
