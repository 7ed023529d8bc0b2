"""
Storage Services Package

Provides the abstract storage interfaces and concrete implementations.
The Google Sheets backend is imported lazily by the orchestrator so that
local setups do not need Google credentials.
"""

from pocket_ledger.services.storage.codec import SkippedRecord, TransactionCodec
from pocket_ledger.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    CorruptCollectionError,
    LedgerStorageInterface,
    StorageError,
)
from pocket_ledger.services.storage.json_file import JsonFileLedgerStorage
from pocket_ledger.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LedgerStorageInterface",
    # Exceptions
    "ConnectionError",
    "CorruptCollectionError",
    "StorageError",
    # Codec
    "SkippedRecord",
    "TransactionCodec",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
