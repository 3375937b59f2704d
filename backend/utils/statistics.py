"""Spending statistics: how much of each expense was the user's own share."""

from datetime import datetime, tzinfo
from typing import Optional

import config
import models
import schemas
from utils.boundary import read_operation
from utils.store import LedgerStore, ExpenseFilter


def to_epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp()) * 1000


MIN_YEAR = 1970
MAX_YEAR = 9998  # datetime cannot represent the start of year 10000


def current_year(tz: Optional[tzinfo] = None) -> int:
    return datetime.now(tz or config.LEDGER_TIMEZONE).year


def normalize_year(year: Optional[int]) -> int:
    """The current year when ``year`` is None, otherwise ``year`` clamped to [MIN_YEAR, MAX_YEAR]."""
    if year is None:
        return current_year()
    return min(max(year, MIN_YEAR), MAX_YEAR)


def year_bounds(year: int, tz: Optional[tzinfo] = None) -> tuple[int, int]:
    """[start, end) of the calendar year in epoch milliseconds."""
    tz = tz or config.LEDGER_TIMEZONE
    start = datetime(year, 1, 1, tzinfo=tz)
    end = datetime(year + 1, 1, 1, tzinfo=tz)
    return to_epoch_ms(start), to_epoch_ms(end)


def month_starts(year: int, tz: Optional[tzinfo] = None) -> list[int]:
    tz = tz or config.LEDGER_TIMEZONE
    return [to_epoch_ms(datetime(year, month, 1, tzinfo=tz)) for month in range(1, 13)]


def month_start_of(date_ms: int, tz: Optional[tzinfo] = None) -> int:
    """Epoch milliseconds of the first instant of the month containing ``date_ms``."""
    tz = tz or config.LEDGER_TIMEZONE
    dt = datetime.fromtimestamp(date_ms / 1000, tz=tz)
    return to_epoch_ms(datetime(dt.year, dt.month, 1, tzinfo=tz))


def own_share(expense: models.Expense, user_id: int) -> int:
    """The user's split amount, paid or not. Paying without a split is not spending."""
    split = next((s for s in (expense.splits or []) if s.user_id == user_id), None)
    return split.amount if split is not None else 0


def get_year_expenses(store: LedgerStore, user_id: int, year: int) -> list[models.Expense]:
    start, end = year_bounds(year)
    return store.list_expenses(ExpenseFilter(involving_user_id=user_id, date_from=start, date_to=end))


def _zero_total(*args, **kwargs) -> int:
    return 0


@read_operation(default=_zero_total)
def get_total_spent(store: LedgerStore, subject: Optional[models.User], year: Optional[int] = None) -> int:
    """Sum of the subject's own share of every expense dated in ``year`` (default: this year)."""
    year = normalize_year(year)
    return sum(own_share(e, subject.id) for e in get_year_expenses(store, subject.id, year))


def _empty_months(store, subject, year: Optional[int] = None) -> list[schemas.MonthlySpending]:
    year = normalize_year(year)
    return [schemas.MonthlySpending(month=month, total=0) for month in month_starts(year)]


@read_operation(default=_empty_months)
def get_monthly_spending(
    store: LedgerStore,
    subject: Optional[models.User],
    year: Optional[int] = None
) -> list[schemas.MonthlySpending]:
    """
    The subject's spending for each month of ``year``.

    Always twelve entries in chronological order, zero for months without
    expenses. Each expense is bucketed by its own date.
    """
    year = normalize_year(year)

    totals = {month: 0 for month in month_starts(year)}
    for expense in get_year_expenses(store, subject.id, year):
        bucket = month_start_of(expense.date)
        if bucket in totals:
            totals[bucket] += own_share(expense, subject.id)

    return [schemas.MonthlySpending(month=month, total=total) for month, total in sorted(totals.items())]
