"""
JSON File Storage

Keeps every collection in one JSON document on local disk:

    {"expenses": [...], "income": [...]}

This mirrors the on-device key-value store the ledger was designed
around, and is the default backend for single-user setups.

Writes go to a temporary file first and are then moved into place, so a
crash mid-write never leaves a half-written ledger behind.
"""

import contextlib
import json
import os
from pathlib import Path
from typing import Optional, Union

from pocket_ledger.services.storage.interface import (
    CorruptCollectionError,
    LedgerStorageInterface,
    StorageError,
)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """File-backed implementation of ledger storage."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")
        if not text.strip():
            return {}
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptCollectionError(f"{self._path} is not valid JSON: {e}")
        if not isinstance(document, dict):
            raise CorruptCollectionError(f"{self._path} must contain a JSON object")
        return document

    def _write_document(self, document: dict) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(document, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            os.replace(tmp_path, self._path)
        except OSError as e:
            with contextlib.suppress(FileNotFoundError):
                tmp_path.unlink()
            raise StorageError(f"Failed to write {self._path}: {e}")

    async def get(self, collection: str) -> Optional[str]:
        document = self._read_document()
        if collection not in document:
            return None
        return json.dumps(document[collection], ensure_ascii=False)

    async def set(self, collection: str, payload: str) -> None:
        try:
            records = json.loads(payload)
        except json.JSONDecodeError as e:
            raise StorageError(f"Refusing to store non-JSON payload for {collection!r}: {e}")

        document = self._read_document()
        document[collection] = records
        self._write_document(document)
