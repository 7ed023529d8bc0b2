"""Tests for the storage backends and the collection codec."""

import asyncio
import json
import os

import pytest

from pocket_ledger.models.audit import AuditEventBuilder
from pocket_ledger.models.transaction import Transaction, TransactionKind
from pocket_ledger.services.storage import (
    CorruptCollectionError,
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    StorageError,
    TransactionCodec,
)


class TestTransactionCodec:
    """Tests for decoding and encoding collections."""

    def setup_method(self):
        self.codec = TransactionCodec()

    @pytest.mark.parametrize("payload", [None, "", "   "])
    def test_missing_payload_is_empty(self, payload):
        assert self.codec.decode(payload) == ([], [])

    def test_decode_original_records(self):
        payload = json.dumps([
            {"id": "1700000000000", "amount": 40, "category": "Food",
             "notes": "Lunch", "date": "2024-01-10T12:00:00.000Z"},
            {"id": 17, "amount": "12.50", "category": "Bus", "date": "10/01/2024"},
        ])
        transactions, skipped = self.codec.decode(payload, "expenses")
        assert skipped == []
        assert [txn.id for txn in transactions] == ["1700000000000", "17"]
        assert transactions[0].notes == "Lunch"
        assert transactions[1].amount == "12.50"

    def test_record_without_id_is_skipped(self):
        payload = json.dumps([
            {"id": "ok-1", "amount": 1},
            {"amount": 2, "category": "Orphan"},
            "not an object",
            {"id": "ok-2", "amount": 3},
        ])
        transactions, skipped = self.codec.decode(payload, "expenses")
        assert [txn.id for txn in transactions] == ["ok-1", "ok-2"]
        assert [record.position for record in skipped] == [1, 2]
        assert all(record.reason for record in skipped)

    def test_odd_amounts_and_dates_are_kept(self):
        payload = json.dumps([{"id": "x", "amount": -5, "date": "garbage"}])
        transactions, skipped = self.codec.decode(payload)
        assert skipped == []
        assert transactions[0].amount == -5
        assert transactions[0].date == "garbage"

    def test_invalid_json_raises(self):
        with pytest.raises(CorruptCollectionError):
            self.codec.decode("[{", "expenses")

    def test_non_list_raises(self):
        with pytest.raises(CorruptCollectionError):
            self.codec.decode('{"id": "x"}', "expenses")

    def test_load_raw_keeps_every_item(self):
        payload = json.dumps([{"id": "a"}, {"amount": 2}, "not an object"])
        assert self.codec.load_raw(payload, "expenses") == [
            {"id": "a"}, {"amount": 2}, "not an object",
        ]
        assert self.codec.load_raw(None) == []

    def test_load_raw_rejects_non_list(self):
        with pytest.raises(CorruptCollectionError):
            self.codec.load_raw("{}", "income")

    @pytest.mark.parametrize("item,expected", [
        ({"id": "a"}, "a"),
        ({"id": 17}, "17"),
        ({"id": None}, None),
        ({"amount": 2}, None),
        ("not an object", None),
    ])
    def test_record_id(self, item, expected):
        assert TransactionCodec.record_id(item) == expected

    def test_encode_drops_empty_fields(self):
        payload = self.codec.encode([
            Transaction(id="a", amount=40.0, category="Food",
                        date="2024-01-10T12:00:00", kind=TransactionKind.EXPENSE),
            Transaction(id="b", amount=5),
        ])
        assert json.loads(payload) == [
            {"id": "a", "amount": 40.0, "category": "Food",
             "date": "2024-01-10T12:00:00", "kind": "expense"},
            {"id": "b", "amount": 5},
        ]

    def test_decode_reads_what_encode_wrote(self):
        original = [
            Transaction(id="a", amount=40.0, category="Food", notes="Lunch",
                        date="2024-01-10T12:00:00", kind=TransactionKind.EXPENSE),
        ]
        transactions, _ = self.codec.decode(self.codec.encode(original))
        assert transactions == original


class TestInMemoryLedgerStorage:
    """Tests for the dict-backed ledger storage."""

    def test_unknown_collection_is_none(self):
        storage = InMemoryLedgerStorage()
        assert asyncio.run(storage.get("expenses")) is None

    def test_set_then_get(self):
        storage = InMemoryLedgerStorage()
        asyncio.run(storage.set("income", "[]"))
        assert asyncio.run(storage.get("income")) == "[]"

    def test_initial_collections_are_copied(self):
        initial = {"expenses": "[]"}
        storage = InMemoryLedgerStorage(initial)
        asyncio.run(storage.set("expenses", '[{"id": "a"}]'))
        assert initial == {"expenses": "[]"}


class TestInMemoryAuditStorage:
    """Tests for the list-backed audit storage."""

    def test_recent_events_newest_first(self):
        storage = InMemoryAuditStorage()
        first = AuditEventBuilder.delete_not_found("a")
        second = AuditEventBuilder.delete_not_found("b")
        asyncio.run(storage.append_event(first))
        asyncio.run(storage.append_event(second))

        recent = asyncio.run(storage.get_recent_events())
        assert [event.entity_id for event in recent] == ["b", "a"]
        assert [event.entity_id for event in storage.events] == ["a", "b"]

    def test_limit(self):
        storage = InMemoryAuditStorage()
        for n in range(5):
            asyncio.run(storage.append_event(AuditEventBuilder.delete_not_found(str(n))))
        assert len(asyncio.run(storage.get_recent_events(limit=2))) == 2


class TestJsonFileLedgerStorage:
    """Tests for the single-document file storage."""

    def test_missing_file_reads_as_empty(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path / "ledger.json")
        assert asyncio.run(storage.get("expenses")) is None

    def test_collections_share_one_document(self, tmp_path):
        path = tmp_path / "nested" / "ledger.json"
        storage = JsonFileLedgerStorage(path)
        asyncio.run(storage.set("expenses", '[{"id": "e1", "amount": 40}]'))
        asyncio.run(storage.set("income", '[{"id": "i1", "amount": 100}]'))

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document == {
            "expenses": [{"id": "e1", "amount": 40}],
            "income": [{"id": "i1", "amount": 100}],
        }
        assert not path.with_name("ledger.json.tmp").exists()

    def test_get_returns_serialized_list(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path / "ledger.json")
        asyncio.run(storage.set("expenses", '[{"id": "e1", "amount": 40}]'))
        payload = asyncio.run(storage.get("expenses"))
        assert json.loads(payload) == [{"id": "e1", "amount": 40}]

    def test_replacing_a_collection(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path / "ledger.json")
        asyncio.run(storage.set("expenses", '[{"id": "e1"}]'))
        asyncio.run(storage.set("expenses", "[]"))
        assert asyncio.run(storage.get("expenses")) == "[]"

    def test_empty_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("", encoding="utf-8")
        assert asyncio.run(JsonFileLedgerStorage(path).get("income")) is None

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptCollectionError):
            asyncio.run(JsonFileLedgerStorage(path).get("expenses"))

    def test_non_object_document_raises(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(CorruptCollectionError):
            asyncio.run(JsonFileLedgerStorage(path).get("expenses"))

    def test_failed_write_removes_temp_file(self, tmp_path, monkeypatch):
        path = tmp_path / "ledger.json"
        storage = JsonFileLedgerStorage(path)

        def fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail)
        with pytest.raises(StorageError):
            asyncio.run(storage.set("expenses", "[]"))
        assert not path.with_name("ledger.json.tmp").exists()
        assert not path.exists()

    def test_non_json_payload_is_refused(self, tmp_path):
        path = tmp_path / "ledger.json"
        storage = JsonFileLedgerStorage(path)
        with pytest.raises(StorageError):
            asyncio.run(storage.set("expenses", "not json"))
        assert not path.exists()
