"""Services package."""

from pocket_ledger.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    CorruptCollectionError,
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    SkippedRecord,
    StorageError,
    TransactionCodec,
)

__all__ = [
    "AuditStorageInterface",
    "ConnectionError",
    "CorruptCollectionError",
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "SkippedRecord",
    "StorageError",
    "TransactionCodec",
]
