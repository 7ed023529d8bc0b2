"""
Collection Codec

Converts between the serialized JSON lists kept in storage and
Transaction models.

Reading is lenient: a record that cannot become a Transaction at all
(no id, not an object) is skipped and reported, so one broken row does not
hide the rest of the ledger. Odd amounts and dates are NOT skipped; the
engine handles those.
"""

import json
from typing import Any, Iterable, Optional

import structlog
from pydantic import ValidationError

from pocket_ledger.models.transaction import Transaction
from pocket_ledger.services.storage.interface import CorruptCollectionError


logger = structlog.get_logger(__name__)


class SkippedRecord:
    """A stored record that could not be read."""

    __slots__ = ("position", "reason")

    def __init__(self, position: int, reason: str):
        self.position = position
        self.reason = reason

    def __repr__(self) -> str:
        return f"SkippedRecord(position={self.position}, reason={self.reason!r})"


class TransactionCodec:
    """Serializes and deserializes transaction collections."""

    def decode(
        self,
        payload: Optional[str],
        collection: str = "",
    ) -> tuple[list[Transaction], list[SkippedRecord]]:
        """
        Parse a stored payload.

        A missing payload is an empty collection.

        Returns:
            (transactions, skipped_records)

        Raises:
            CorruptCollectionError: payload is not JSON or not a list
        """
        return self.decode_records(self.load_raw(payload, collection), collection)

    def load_raw(self, payload: Optional[str], collection: str = "") -> list:
        """
        Parse a stored payload into its raw JSON items, unvalidated.

        Writers edit this list so records they cannot read survive.

        Raises:
            CorruptCollectionError: payload is not JSON or not a list
        """
        if payload is None or not payload.strip():
            return []

        try:
            raw = json.loads(payload)
        except json.JSONDecodeError as e:
            raise CorruptCollectionError(
                f"Collection {collection!r} is not valid JSON: {e}"
            )
        if not isinstance(raw, list):
            raise CorruptCollectionError(
                f"Collection {collection!r} must be a JSON list, got {type(raw).__name__}"
            )
        return raw

    def decode_records(
        self,
        raw: list,
        collection: str = "",
    ) -> tuple[list[Transaction], list[SkippedRecord]]:
        """Validate raw items; unreadable ones are skipped and logged."""
        transactions = []
        skipped = []
        for position, item in enumerate(raw):
            try:
                transactions.append(Transaction.model_validate(item))
            except ValidationError as e:
                reason = f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}"
                skipped.append(SkippedRecord(position, reason))
                logger.warning(
                    "record_skipped",
                    collection=collection,
                    position=position,
                    reason=reason,
                )
        return transactions, skipped

    def to_record(self, transaction: Transaction) -> dict:
        """JSON-ready dict for one transaction."""
        return transaction.model_dump(mode="json", exclude_none=True)

    def encode(self, transactions: Iterable[Transaction]) -> str:
        """Serialize transactions as a JSON list."""
        return self.dump_raw([self.to_record(txn) for txn in transactions])

    def dump_raw(self, records: list) -> str:
        """Serialize raw JSON items back into a payload."""
        return json.dumps(records, ensure_ascii=False)

    @staticmethod
    def record_id(item: Any) -> Optional[str]:
        """Id of a raw item as the model would read it, or None."""
        if not isinstance(item, dict):
            return None
        value = item.get("id")
        if value is None or isinstance(value, bool):
            return None
        return str(value)
