"""Shared fixtures: a fixed evaluation moment and a transaction factory."""

from datetime import datetime

import pytest

from pocket_ledger.engine import classify
from pocket_ledger.models.transaction import TransactionKind


NOW = datetime(2024, 1, 15, 12, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_txn():
    """Build a classified transaction from a few keyword arguments."""
    counter = {"n": 0}

    def factory(
        amount=10,
        kind=TransactionKind.EXPENSE,
        date="2024-01-10",
        category="Misc",
        notes=None,
        id=None,
    ):
        counter["n"] += 1
        return classify({
            "id": id or f"txn-{counter['n']}",
            "amount": amount,
            "kind": kind,
            "date": date,
            "category": category,
            "notes": notes,
        })

    return factory
