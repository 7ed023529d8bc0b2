"""Exceptions raised by the ledger engine."""


class LedgerError(Exception):
    """Base exception for ledger engine errors."""
    pass


class UnknownKindError(LedgerError):
    """A record has no kind and its collection does not imply one."""
    pass


class NoTransactionsError(LedgerError):
    """A report was requested over an empty ledger."""
    pass
