"""
Main Orchestrator for Pocket Ledger

This module ties storage, the engine and the audit trail together and
defines the flows the app exposes:
1. Add a transaction (validate -> append to its collection -> audit)
2. Delete a transaction (find by id in either collection -> remove -> audit)
3. Dashboard totals
4. Browse: filter + group by day
5. Export: full report for the share facility

DESIGN DECISION: The orchestrator never caches. Every flow reads a fresh
snapshot from storage and hands it to the pure engine, so what the user
sees is always what is stored.

"Now" comes from an injectable clock so every temporal result can be
reproduced in tests.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID, uuid4

import structlog

from pocket_ledger.audit import AuditLogger, create_correlation_id
from pocket_ledger.config import (
    ConfigurationError,
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)
from pocket_ledger.engine import (
    NoTransactionsError,
    ReportFormatter,
    aggregate,
    apply_filter,
    group_by_day,
    merge_collections,
)
from pocket_ledger.models.transaction import (
    ClassifiedTransaction,
    DayGroup,
    LedgerFilter,
    LedgerTotals,
    NewTransaction,
    SharePayload,
    Transaction,
    TransactionKind,
)
from pocket_ledger.services.storage import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
    TransactionCodec,
)


Clock = Callable[[], datetime]

logger = structlog.get_logger(__name__)


class LedgerService:
    """
    Application-facing ledger operations.

    Flow for every read:
        storage.get(expenses), storage.get(income)
        -> decode -> classify (expenses first, then income)
        -> engine (aggregate / filter+group / report)
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
        clock: Optional[Clock] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._settings = settings or LedgerSettings()
        self._clock = clock or datetime.now
        self._codec = TransactionCodec()
        self._formatter = ReportFormatter(
            currency_code=self._settings.currency_code,
            title=self._settings.report_title,
        )

    @property
    def currency_code(self) -> str:
        return self._settings.currency_code

    def _collection_for(self, kind: TransactionKind) -> str:
        if kind == TransactionKind.INCOME:
            return self._settings.income_collection
        return self._settings.expenses_collection

    async def _read_raw(
        self,
        collection: str,
        correlation_id: Optional[UUID] = None,
    ) -> list:
        try:
            payload = await self._storage.get(collection)
            return self._codec.load_raw(payload, collection)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation=f"read {collection}",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

    async def _read_collection(
        self,
        collection: str,
        correlation_id: Optional[UUID] = None,
    ) -> list[Transaction]:
        raw = await self._read_raw(collection, correlation_id)
        transactions, skipped = self._codec.decode_records(raw, collection)

        if self._audit_logger:
            for record in skipped:
                await self._audit_logger.log_record_skipped(
                    collection=collection,
                    position=record.position,
                    reason=record.reason,
                    correlation_id=correlation_id,
                )
        return transactions

    async def _write_raw(
        self,
        collection: str,
        records: list,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        try:
            await self._storage.set(collection, self._codec.dump_raw(records))
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation=f"write {collection}",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

    async def load_transactions(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> list[ClassifiedTransaction]:
        """
        Read and classify the current snapshot.

        Returns expenses followed by income, each in stored order.
        """
        expenses = await self._read_collection(
            self._settings.expenses_collection, correlation_id
        )
        income = await self._read_collection(
            self._settings.income_collection, correlation_id
        )

        if self._audit_logger:
            await self._audit_logger.log_snapshot_loaded(
                expense_count=len(expenses),
                income_count=len(income),
                correlation_id=correlation_id,
            )

        return merge_collections(
            expenses,
            income,
            expenses_collection=self._settings.expenses_collection,
            income_collection=self._settings.income_collection,
        )

    async def add_transaction(
        self,
        new: NewTransaction,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Append a validated transaction to its collection.

        The id is a fresh uuid4 string; ids are never reused.
        """
        correlation_id = correlation_id or create_correlation_id()
        when = new.date or self._clock()

        transaction = Transaction(
            id=str(uuid4()),
            amount=float(new.amount),
            category=new.category,
            notes=new.notes or None,
            date=when.isoformat(),
            kind=new.kind,
        )

        # Existing items are written back verbatim, readable or not
        collection = self._collection_for(new.kind)
        existing = await self._read_raw(collection, correlation_id)
        await self._write_raw(
            collection,
            existing + [self._codec.to_record(transaction)],
            correlation_id,
        )

        logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            collection=collection,
        )
        if self._audit_logger:
            await self._audit_logger.log_transaction_added(
                transaction_id=transaction.id,
                kind=new.kind.value,
                amount=f"{new.amount:.2f}",
                category=new.category,
                correlation_id=correlation_id,
            )
        return transaction

    async def delete_transaction(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Remove a transaction from whichever collection holds it.

        Deleting an unknown id is a no-op.

        Returns:
            True if something was removed
        """
        correlation_id = correlation_id or create_correlation_id()

        for collection in (
            self._settings.expenses_collection,
            self._settings.income_collection,
        ):
            records = await self._read_raw(collection, correlation_id)
            remaining = [
                item for item in records
                if self._codec.record_id(item) != transaction_id
            ]
            if len(remaining) == len(records):
                continue

            await self._write_raw(collection, remaining, correlation_id)
            if self._audit_logger:
                await self._audit_logger.log_transaction_deleted(
                    transaction_id=transaction_id,
                    collection=collection,
                    correlation_id=correlation_id,
                )
            return True

        if self._audit_logger:
            await self._audit_logger.log_delete_not_found(
                transaction_id=transaction_id,
                correlation_id=correlation_id,
            )
        return False

    async def dashboard(self) -> LedgerTotals:
        """Totals and per-category expense breakdown for the dashboard."""
        return aggregate(await self.load_transactions())

    async def browse(
        self,
        ledger_filter: Optional[LedgerFilter] = None,
    ) -> list[DayGroup]:
        """Filtered, newest-first day groups for the transaction browser."""
        now = self._clock()
        transactions = await self.load_transactions()
        selected = apply_filter(transactions, ledger_filter or LedgerFilter(), now)
        return group_by_day(selected, now)

    async def export_report(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> SharePayload:
        """
        Build the shareable report over the whole ledger.

        Raises:
            NoTransactionsError: the ledger is empty; show a message instead
        """
        correlation_id = correlation_id or create_correlation_id()
        now = self._clock()
        transactions = await self.load_transactions(correlation_id)

        try:
            payload = self._formatter.share_payload(transactions, now)
        except NoTransactionsError:
            if self._audit_logger:
                await self._audit_logger.log_report_empty(correlation_id=correlation_id)
            raise

        if self._audit_logger:
            await self._audit_logger.log_report_exported(
                transaction_count=len(transactions),
                title=payload.title,
                correlation_id=correlation_id,
            )
        return payload


def create_storage(ledger_settings: LedgerSettings) -> LedgerStorageInterface:
    """Build the configured ledger storage backend."""
    backend = ledger_settings.storage_backend
    if backend == "memory":
        return InMemoryLedgerStorage()
    if backend == "google_sheets":
        # Imported here so local setups don't need the Google stack loaded
        from pocket_ledger.services.storage.google_sheets import GoogleSheetsLedgerStorage
        return GoogleSheetsLedgerStorage()
    return JsonFileLedgerStorage(ledger_settings.data_path)


def create_ledger_service(
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
) -> LedgerService:
    """
    Create a LedgerService wired from configuration.

    The audit trail goes to Google Sheets when that backend is selected,
    and stays in memory otherwise.

    Raises:
        ConfigurationError: a required setting is missing or invalid
    """
    settings = settings or get_settings()
    status = validate_all_settings(settings)
    errors = [
        f"{name}: {status.get(f'{name}_error', 'invalid')}"
        for name, ok in status.items()
        if ok is False
    ]
    if errors:
        raise ConfigurationError("; ".join(errors))

    ledger_settings = settings.ledger
    app_settings = settings.app

    if ledger_settings.storage_backend == "google_sheets":
        from pocket_ledger.services.storage.google_sheets import (
            GoogleSheetsAuditStorage,
            GoogleSheetsClient,
            GoogleSheetsLedgerStorage,
        )
        client = GoogleSheetsClient(settings.google_sheets)
        storage = GoogleSheetsLedgerStorage(client)
        audit_storage = GoogleSheetsAuditStorage(client)
    else:
        storage = create_storage(ledger_settings)
        audit_storage = InMemoryAuditStorage()

    logger.info(
        "ledger_service_created",
        environment=app_settings.app_environment,
        backend=ledger_settings.storage_backend,
    )
    return LedgerService(
        storage=storage,
        audit_logger=AuditLogger(audit_storage, debug=app_settings.debug_mode),
        settings=ledger_settings,
        clock=clock,
    )
