"""
Record Classification

Tags each stored record with its kind and computes the amount it
contributes to aggregates.

DESIGN DECISION: Classification fails closed on amounts. A record whose
amount is negative, NaN, infinite or not a number at all contributes ZERO
to every sum, but it is not dropped: listings still show it with its raw
value so the user can see that something is wrong.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Union

from pocket_ledger.engine.errors import UnknownKindError
from pocket_ledger.models.transaction import (
    ClassifiedTransaction,
    Transaction,
    TransactionKind,
)

COLLECTION_KINDS = {
    "expenses": TransactionKind.EXPENSE,
    "expense": TransactionKind.EXPENSE,
    "income": TransactionKind.INCOME,
    "incomes": TransactionKind.INCOME,
}

RawRecord = Union[Transaction, Mapping[str, Any]]


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Read a stored amount as a finite, non-negative Decimal.

    Returns None when the value cannot be used in a sum.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    else:
        # str() first so floats keep their shortest repr, not binary noise
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def kind_for_collection(collection: Optional[str]) -> Optional[TransactionKind]:
    """Kind implied by the storage collection a record was read from."""
    if not collection:
        return None
    return COLLECTION_KINDS.get(collection.strip().lower())


def classify(
    record: RawRecord,
    collection: Optional[str] = None,
    default_kind: Optional[TransactionKind] = None,
) -> ClassifiedTransaction:
    """
    Attach a kind and a safe contribution to one record.

    An explicit kind on the record wins, then `default_kind`, then the
    kind implied by the collection name.

    Raises:
        UnknownKindError: neither the record nor the collection gives a kind
    """
    if isinstance(record, ClassifiedTransaction):
        return record
    if not isinstance(record, Transaction):
        record = Transaction.model_validate(record)

    kind = record.kind or default_kind or kind_for_collection(collection)
    if kind is None:
        raise UnknownKindError(
            f"Cannot classify transaction {record.id}: "
            f"no kind and unknown collection {collection!r}"
        )

    amount = parse_amount(record.amount)
    data = record.model_dump()
    data.update(
        kind=kind,
        contribution=amount if amount is not None else Decimal("0"),
        amount_valid=amount is not None,
    )
    return ClassifiedTransaction.model_validate(data)


def classify_collection(
    records: Iterable[RawRecord],
    collection: str,
    default_kind: Optional[TransactionKind] = None,
) -> list[ClassifiedTransaction]:
    """Classify every record read from one collection, keeping order."""
    return [classify(record, collection, default_kind) for record in records]


def merge_collections(
    expenses: Iterable[RawRecord],
    income: Iterable[RawRecord],
    expenses_collection: str = "expenses",
    income_collection: str = "income",
) -> list[ClassifiedTransaction]:
    """
    Classify both collections and merge them: expenses first, then income.

    This is the insertion order every stable sort downstream relies on.
    """
    return (
        classify_collection(expenses, expenses_collection, TransactionKind.EXPENSE)
        + classify_collection(income, income_collection, TransactionKind.INCOME)
    )
