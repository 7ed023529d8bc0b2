"""
Audit Logger

DESIGN DECISION: Every mutation of the ledger and every export is logged.
This provides:
1. A history of additions and deletions
2. Visibility into malformed stored records
3. Debugging capability

The audit logger:
- Always logs locally through structlog
- Persists to an audit store when one is configured
- Never lets an audit failure break the ledger operation that caused it
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from pocket_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from pocket_ledger.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store (for persistence), if configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        debug: bool = False,
    ):
        """
        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
            debug: Also emit DEBUG-severity events
        """
        self._storage = storage
        self._debug = debug
        self._logger = structlog.get_logger("pocket_ledger.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if storage write succeeded (or no storage configured).
        """
        if event.severity == AuditSeverity.DEBUG and not self._debug:
            return True

        log_dict = event.to_log_dict()
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_transaction_added(
        self,
        transaction_id: str,
        kind: str,
        amount: str,
        category: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            kind=kind,
            amount=amount,
            category=category,
            correlation_id=correlation_id,
        ))

    async def log_transaction_deleted(
        self,
        transaction_id: str,
        collection: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.transaction_deleted(
            transaction_id=transaction_id,
            collection=collection,
            correlation_id=correlation_id,
        ))

    async def log_delete_not_found(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.delete_not_found(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        ))

    async def log_snapshot_loaded(
        self,
        expense_count: int,
        income_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.snapshot_loaded(
            expense_count=expense_count,
            income_count=income_count,
            correlation_id=correlation_id,
        ))

    async def log_record_skipped(
        self,
        collection: str,
        position: int,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.record_skipped(
            collection=collection,
            position=position,
            reason=reason,
            correlation_id=correlation_id,
        ))

    async def log_report_exported(
        self,
        transaction_count: int,
        title: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.report_exported(
            transaction_count=transaction_count,
            title=title,
            correlation_id=correlation_id,
        ))

    async def log_report_empty(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.report_empty(correlation_id=correlation_id))

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action and pass it through.
    """
    return uuid4()
