"""
Data Models Package

This package contains all Pydantic models used in Pocket Ledger.
"""

from pocket_ledger.models.transaction import (
    UNCATEGORIZED,
    CategoryTotal,
    ClassifiedTransaction,
    DayGroup,
    FilterMode,
    LedgerFilter,
    LedgerTotals,
    NewTransaction,
    SharePayload,
    Transaction,
    TransactionKind,
)
from pocket_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "UNCATEGORIZED",
    "CategoryTotal",
    "ClassifiedTransaction",
    "DayGroup",
    "FilterMode",
    "LedgerFilter",
    "LedgerTotals",
    "NewTransaction",
    "SharePayload",
    "Transaction",
    "TransactionKind",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
