"""
Report Formatting

Renders the whole ledger as plain text for sharing/export.

Layout:
    title line (point-in-time snapshot date)
    summary block (income, expenses, net balance, transaction count)
    one section per day, newest first, each with its entries and subtotal
    closing marker

DESIGN DECISION: Rendering is pure and deterministic. The same collection
in the same insertion order always yields byte-identical text, except for
the title line, which carries the generation date. Month names come from
a fixed table so the output does not depend on the process locale.

An empty ledger is NOT rendered: NoTransactionsError is raised and the
caller decides what to show instead.
"""

from datetime import datetime
from typing import Sequence

from pocket_ledger.engine.aggregator import aggregate
from pocket_ledger.engine.currency import currency_symbol, format_money
from pocket_ledger.engine.errors import NoTransactionsError
from pocket_ledger.engine.grouping import group_by_day
from pocket_ledger.models.transaction import (
    ClassifiedTransaction,
    DayGroup,
    SharePayload,
)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

RULE_WIDTH = 50
HEAVY_RULE = "=" * RULE_WIDTH
LIGHT_RULE = "-" * RULE_WIDTH
END_MARKER = "End of report"


def snapshot_date(moment: datetime) -> str:
    """`19 Oct 2026` style date used in titles."""
    return f"{moment.day:02d} {MONTH_ABBREVIATIONS[moment.month - 1]} {moment.year}"


class ReportFormatter:
    """
    Formats a transaction collection into a shareable text report.

    The currency code is only a label; amounts are printed as stored.
    """

    def __init__(self, currency_code: str = "USD", title: str = "Ledger Report"):
        self._currency = currency_code
        self._title = title

    def render(
        self,
        transactions: Sequence[ClassifiedTransaction],
        now: datetime,
    ) -> str:
        """
        Render the full report.

        Args:
            transactions: The whole (unfiltered) ledger, expenses then income
            now: Generation moment; also the fallback for unreadable dates

        Raises:
            NoTransactionsError: if `transactions` is empty
        """
        if not transactions:
            raise NoTransactionsError("No transactions to report")

        lines = [self.title_line(now), HEAVY_RULE, ""]
        lines.extend(self._summary_lines(transactions))

        for group in group_by_day(transactions, now):
            lines.append("")
            lines.extend(self._day_lines(group))

        lines.extend(["", HEAVY_RULE, END_MARKER])
        return "\n".join(lines) + "\n"

    def share_payload(
        self,
        transactions: Sequence[ClassifiedTransaction],
        now: datetime,
    ) -> SharePayload:
        """Title and text for the external share/export facility."""
        text = self.render(transactions, now)
        return SharePayload(
            title=f"{self._title} {snapshot_date(now)}",
            text=text,
        )

    def title_line(self, now: datetime) -> str:
        return f"{self._title} - snapshot as of {snapshot_date(now)}"

    def _money(self, amount, signed: bool = False) -> str:
        return format_money(amount, self._currency, signed=signed)

    def _summary_lines(self, transactions: Sequence[ClassifiedTransaction]) -> list[str]:
        totals = aggregate(transactions)
        return [
            "SUMMARY",
            f"  {'Total Income:':<18}{self._money(totals.total_income)}",
            f"  {'Total Expenses:':<18}{self._money(totals.total_expense)}",
            f"  {'Net Balance:':<18}{self._money(totals.balance)}",
            f"  {'Transactions:':<18}{totals.transaction_count}",
        ]

    def _amount_text(self, txn: ClassifiedTransaction) -> str:
        if txn.amount_valid:
            return self._money(txn.signed_amount, signed=True)
        # Shown as stored so the bad value is visible, never summed
        raw = "?" if txn.amount is None else str(txn.amount)
        return f"{currency_symbol(self._currency)}{raw} [not counted]"

    def _day_lines(self, group: DayGroup) -> list[str]:
        lines = [LIGHT_RULE, group.date_label, LIGHT_RULE]
        for txn in group.transactions:
            lines.append(
                f"  {txn.kind.label:<8} {self._amount_text(txn):<14} {txn.display_category}"
            )
            if txn.notes and txn.notes.strip():
                lines.append(f"  {'':<8} Notes: {txn.notes.strip()}")
        lines.append(
            f"  Day total: Income {self._money(group.day_income)}"
            f" | Expenses {self._money(group.day_expense)}"
            f" | Balance {self._money(group.day_balance)}"
        )
        return lines
