"""
Temporal Filters

Selects the transactions shown by the browser: all of them, the last
week, this month, this year, or one specific day.

Filtering never mutates or reorders its input. Ordering is the job of
the grouped view.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Sequence, TypeVar

from pocket_ledger.engine.dates import normalize_datetime
from pocket_ledger.models.transaction import (
    FilterMode,
    LedgerFilter,
    Transaction,
)

WEEK = timedelta(days=7)

T = TypeVar("T", bound=Transaction)


def within_week(moment: datetime, now: datetime) -> bool:
    """
    Rolling 7x24h window ending at `now`.

    The boundary is inclusive: an entry exactly seven days old is kept.
    Future-dated entries have negative elapsed time and are kept as well.
    """
    return now - moment <= WEEK


def _predicate(ledger_filter: LedgerFilter, now: datetime) -> Callable[[datetime], bool]:
    mode = ledger_filter.mode

    if mode == FilterMode.WEEKLY:
        return lambda moment: within_week(moment, now)
    if mode == FilterMode.MONTHLY:
        return lambda moment: (moment.year, moment.month) == (now.year, now.month)
    if mode == FilterMode.YEARLY:
        return lambda moment: moment.year == now.year
    if mode == FilterMode.ON_DATE:
        target: date = ledger_filter.on
        return lambda moment: moment.date() == target
    return lambda moment: True


def apply_filter(
    transactions: Sequence[T],
    ledger_filter: LedgerFilter,
    now: datetime,
) -> list[T]:
    """
    Return the transactions matching `ledger_filter`, in input order.

    Args:
        transactions: Transactions to filter (not modified)
        ledger_filter: Selected filter mode
        now: Evaluation moment for the relative modes
    """
    if ledger_filter.mode == FilterMode.ALL:
        return list(transactions)

    if now.tzinfo is not None:
        now = now.replace(tzinfo=None)
    matches = _predicate(ledger_filter, now)
    return [
        txn for txn in transactions
        if matches(normalize_datetime(txn.date, now))
    ]
