"""
Grouped Day View

Turns a (possibly filtered) list of transactions into day buckets for the
transaction browser and the report.

Algorithm:
1. Stable sort by normalized calendar day, newest first. Entries on the
   same day keep their input order (expenses before income when the
   input came from merge_collections).
2. Bucket by the DD/MM/YYYY label, in order of first occurrence.
3. Subtotal each bucket with the aggregator.

GUARANTEE: flattening the groups in order gives back exactly the sorted
input. Nothing is lost and nothing is duplicated.
"""

from datetime import datetime
from typing import Sequence

from pocket_ledger.engine.aggregator import aggregate
from pocket_ledger.engine.dates import format_day_label, normalize_date
from pocket_ledger.models.transaction import ClassifiedTransaction, DayGroup


def sort_newest_first(
    transactions: Sequence[ClassifiedTransaction],
    now: datetime,
) -> list[ClassifiedTransaction]:
    # sorted() with reverse=True is still stable for equal keys
    return sorted(
        transactions,
        key=lambda txn: normalize_date(txn.date, now),
        reverse=True,
    )


def group_by_day(
    transactions: Sequence[ClassifiedTransaction],
    now: datetime,
) -> list[DayGroup]:
    """Build newest-first day groups with per-day subtotals."""
    buckets: dict[str, list[ClassifiedTransaction]] = {}
    days = {}

    for txn in sort_newest_first(transactions, now):
        day = normalize_date(txn.date, now)
        label = format_day_label(day)
        if label not in buckets:
            buckets[label] = []
            days[label] = day
        buckets[label].append(txn)

    groups = []
    for label, members in buckets.items():
        totals = aggregate(members)
        groups.append(DayGroup(
            day=days[label],
            date_label=label,
            transactions=members,
            day_income=totals.total_income,
            day_expense=totals.total_expense,
            day_balance=totals.balance,
        ))
    return groups


def flatten(groups: Sequence[DayGroup]) -> list[ClassifiedTransaction]:
    """All transactions of the groups, in group order."""
    return [txn for group in groups for txn in group.transactions]
