"""
Ledger Aggregation & Reporting Engine

Pure, synchronous functions over an in-memory snapshot of transactions.
Nothing in this package touches storage or keeps state between calls.
"""

from pocket_ledger.engine.aggregator import aggregate, daily_totals
from pocket_ledger.engine.classifier import (
    classify,
    classify_collection,
    kind_for_collection,
    merge_collections,
    parse_amount,
)
from pocket_ledger.engine.currency import (
    CURRENCY_SYMBOLS,
    currency_symbol,
    format_money,
)
from pocket_ledger.engine.dates import (
    format_day_label,
    is_parseable,
    normalize_date,
    normalize_datetime,
)
from pocket_ledger.engine.errors import (
    LedgerError,
    NoTransactionsError,
    UnknownKindError,
)
from pocket_ledger.engine.filters import apply_filter, within_week
from pocket_ledger.engine.grouping import flatten, group_by_day, sort_newest_first
from pocket_ledger.engine.report import ReportFormatter, snapshot_date

__all__ = [
    # Aggregation
    "aggregate",
    "daily_totals",
    # Classification
    "classify",
    "classify_collection",
    "kind_for_collection",
    "merge_collections",
    "parse_amount",
    # Currency
    "CURRENCY_SYMBOLS",
    "currency_symbol",
    "format_money",
    # Dates
    "format_day_label",
    "is_parseable",
    "normalize_date",
    "normalize_datetime",
    # Errors
    "LedgerError",
    "NoTransactionsError",
    "UnknownKindError",
    # Filtering and grouping
    "apply_filter",
    "within_week",
    "flatten",
    "group_by_day",
    "sort_newest_first",
    # Reporting
    "ReportFormatter",
    "snapshot_date",
]
