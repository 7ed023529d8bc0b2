"""
Core Data Models for Pocket Ledger

These models define the schemas for everything flowing through the ledger.
They are designed to:
1. Tolerate whatever the storage layer hands back (old records, bad values)
2. Be strict at creation time, where a human is still in the loop
3. Be serializable for storage and logging

DESIGN DECISION: Stored records are read leniently, new records are
validated strictly. A dashboard must never crash because of one bad row,
but a bad row must never be written in the first place.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Whether a transaction adds to or subtracts from the balance.

    The value matches the `type` tag the transaction browser attaches to
    merged records, so stored records tagged either way parse the same.
    """
    EXPENSE = "expense"
    INCOME = "income"

    @property
    def label(self) -> str:
        """Display label used in listings and reports."""
        return self.value.capitalize()


class FilterMode(str, Enum):
    """Temporal filters offered by the transaction browser."""
    ALL = "all"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ON_DATE = "on_date"


# =============================================================================
# TRANSACTION MODELS
# =============================================================================

class Transaction(BaseModel):
    """
    A single ledger entry as read from storage.

    CRITICAL: Nothing here is trusted. `amount` is kept exactly as stored
    (it may be negative, NaN, a string or missing) and `date` may be in
    any of the supported encodings. The engine decides what is usable.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, the only delete/match key"
    )
    amount: Any = Field(
        default=None,
        description="Magnitude as stored; sign comes from kind"
    )
    category: Optional[str] = Field(
        default=None,
        description="Expense category or income source"
    )
    notes: Optional[str] = None
    date: Any = Field(
        default=None,
        description="Calendar day, any encoding; unreadable values count as now"
    )
    kind: Optional[TransactionKind] = Field(
        default=None,
        validation_alias=AliasChoices("kind", "type"),
        description="Explicit kind; inferred from the collection when absent"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Older records used numeric ids."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("category", "notes", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        """Numbers and other scalars stored as labels are kept as text."""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("kind", mode="before")
    @classmethod
    def parse_kind(cls, v: Any) -> Optional[TransactionKind]:
        """Accept any casing; unknown labels count as absent."""
        if v is None or isinstance(v, TransactionKind):
            return v
        label = str(v).strip().lower()
        if label in ("expense", "expenses"):
            return TransactionKind.EXPENSE
        if label in ("income", "incomes"):
            return TransactionKind.INCOME
        return None

    @property
    def display_category(self) -> str:
        """Category label, with a placeholder for blank values."""
        if self.category and self.category.strip():
            return self.category.strip()
        return UNCATEGORIZED


UNCATEGORIZED = "Uncategorized"


class ClassifiedTransaction(Transaction):
    """
    A transaction with a guaranteed kind and a safe contribution.

    `contribution` is the non-negative Decimal that enters every sum.
    It is zero when the stored amount is unusable, but the record itself
    is still listed so the problem stays visible.
    """

    kind: TransactionKind
    contribution: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Amount that enters aggregates"
    )
    amount_valid: bool = Field(
        default=True,
        description="False when the stored amount was unusable"
    )

    @property
    def is_income(self) -> bool:
        return self.kind == TransactionKind.INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind == TransactionKind.EXPENSE

    @property
    def signed_amount(self) -> Decimal:
        """+contribution for income, -contribution for expense."""
        if self.is_income:
            return self.contribution
        return -self.contribution


class NewTransaction(BaseModel):
    """
    A transaction about to be created.

    This model is STRICT, unlike Transaction: a new entry needs a real,
    non-negative amount and a non-empty category before it is stored.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    kind: TransactionKind
    amount: Decimal = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Magnitude in the configured currency unit"
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Expense category or income source"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
    )
    date: Optional[datetime] = Field(
        default=None,
        description="Defaults to the creation moment"
    )


# =============================================================================
# DERIVED VIEWS - recomputed on every call, never persisted
# =============================================================================

class CategoryTotal(BaseModel):
    """Summed expense amount for one category."""

    name: str
    amount: Decimal


class LedgerTotals(BaseModel):
    """Dashboard totals over a set of transactions."""

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    categories: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Expense totals by category, in first-seen order"
    )
    transaction_count: int = Field(default=0, ge=0)

    @property
    def category_totals(self) -> list[CategoryTotal]:
        return [
            CategoryTotal(name=name, amount=amount)
            for name, amount in self.categories.items()
        ]

    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0


class DayGroup(BaseModel):
    """All transactions sharing one calendar day, with day subtotals."""

    day: date
    date_label: str = Field(
        ...,
        description="DD/MM/YYYY grouping key"
    )
    transactions: list[ClassifiedTransaction] = Field(default_factory=list)
    day_income: Decimal = Decimal("0")
    day_expense: Decimal = Decimal("0")
    day_balance: Decimal = Decimal("0")


class LedgerFilter(BaseModel):
    """
    A temporal filter selected by the caller.

    `on` is required for ON_DATE and forbidden otherwise.
    """
    model_config = ConfigDict(frozen=True)

    mode: FilterMode = FilterMode.ALL
    on: Optional[date] = None

    @model_validator(mode="after")
    def check_target_date(self) -> "LedgerFilter":
        if self.mode == FilterMode.ON_DATE and self.on is None:
            raise ValueError("ON_DATE filter needs a target date")
        if self.mode != FilterMode.ON_DATE and self.on is not None:
            raise ValueError(f"{self.mode.value} filter does not take a date")
        return self

    @classmethod
    def on_date(cls, day: date) -> "LedgerFilter":
        if isinstance(day, datetime):
            day = day.date()
        return cls(mode=FilterMode.ON_DATE, on=day)


class SharePayload(BaseModel):
    """What the export facility receives: an opaque title and text."""

    title: str
    text: str
