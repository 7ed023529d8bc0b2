"""
Abstract Storage Interface

DESIGN DECISION: Storage is an injected key-value interface. The ledger is
kept as named collections ("expenses", "income"), each one a serialized
JSON list. This allows us to:
1. Use in-memory storage for testing
2. Keep a local JSON file for single-user setups
3. Swap in Google Sheets (or anything else) without touching the engine

The engine never talks to storage. Only the orchestrator does.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pocket_ledger.models.audit import AuditEvent


class LedgerStorageInterface(ABC):
    """
    Key-value storage of serialized transaction collections.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def get(self, collection: str) -> Optional[str]:
        """
        Read a collection.

        Args:
            collection: Logical collection name (e.g. "expenses")

        Returns:
            The serialized JSON list, or None if the collection was never set

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, collection: str, payload: str) -> None:
        """
        Replace a collection.

        Args:
            collection: Logical collection name
            payload: Serialized JSON list of transactions

        Raises:
            StorageError: If the write fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass


class CorruptCollectionError(StorageError):
    """A stored collection is not a JSON list."""
    pass
