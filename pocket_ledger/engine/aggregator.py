"""
Aggregation

Totals for the dashboard: income, expense, balance and expense per
category, plus the same totals per calendar day.

GUARANTEES:
- balance == total_income - total_expense, exactly (Decimal arithmetic)
- category totals do not depend on input order
- empty input gives zeros and an empty category mapping, never an error
- a record with an unusable amount adds zero everywhere
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable

from pocket_ledger.engine.dates import format_day_label, normalize_date
from pocket_ledger.models.transaction import ClassifiedTransaction, LedgerTotals


def aggregate(transactions: Iterable[ClassifiedTransaction]) -> LedgerTotals:
    """Compute totals over classified transactions."""
    total_income = Decimal("0")
    total_expense = Decimal("0")
    categories: dict[str, Decimal] = {}
    count = 0

    for txn in transactions:
        count += 1
        if txn.is_income:
            total_income += txn.contribution
            continue

        total_expense += txn.contribution
        # Income is not broken out by source here
        name = txn.display_category
        categories[name] = categories.get(name, Decimal("0")) + txn.contribution

    return LedgerTotals(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        categories=categories,
        transaction_count=count,
    )


def daily_totals(
    transactions: Iterable[ClassifiedTransaction],
    now: datetime,
) -> dict[str, LedgerTotals]:
    """
    Totals per calendar day, keyed by `DD/MM/YYYY`, newest day first.
    """
    buckets: dict = {}
    for txn in transactions:
        day = normalize_date(txn.date, now)
        buckets.setdefault(day, []).append(txn)

    return {
        format_day_label(day): aggregate(buckets[day])
        for day in sorted(buckets, reverse=True)
    }
