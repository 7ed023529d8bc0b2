"""
In-Memory Storage

Dictionary-backed storage for tests and throwaway sessions.
"""

from typing import Optional

from pocket_ledger.models.audit import AuditEvent
from pocket_ledger.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Collections live in a dict for the lifetime of the object."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._collections: dict[str, str] = dict(initial or {})

    async def get(self, collection: str) -> Optional[str]:
        return self._collections.get(collection)

    async def set(self, collection: str, payload: str) -> None:
        self._collections[collection] = payload


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)
