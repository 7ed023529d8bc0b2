"""Tests for the shareable text report."""

from datetime import datetime

import pytest

from pocket_ledger.engine.errors import NoTransactionsError
from pocket_ledger.engine.report import ReportFormatter, snapshot_date
from pocket_ledger.models.transaction import TransactionKind

NOW = datetime(2024, 1, 15, 12, 0, 0)
INCOME = TransactionKind.INCOME
EXPENSE = TransactionKind.EXPENSE

HEAVY = "=" * 50
LIGHT = "-" * 50


@pytest.fixture
def ledger(make_txn):
    return [
        make_txn(amount=40, kind=EXPENSE, date="2024-01-10", category="Food", notes="Lunch"),
        make_txn(amount=100, kind=INCOME, date="10/01/2024", category="Salary", notes="   "),
        make_txn(amount=1234.5, kind=EXPENSE, date="2024-01-11T09:00:00Z", category="Rent"),
    ]


class TestReportLayout:
    """The full report text is fixed for a given ledger."""

    def test_full_text(self, ledger):
        expected = "\n".join([
            "Ledger Report - snapshot as of 15 Jan 2024",
            HEAVY,
            "",
            "SUMMARY",
            "  Total Income:     $100.00",
            "  Total Expenses:   $1,274.50",
            "  Net Balance:      -$1,174.50",
            "  Transactions:     3",
            "",
            LIGHT,
            "11/01/2024",
            LIGHT,
            "  Expense  -$1,234.50     Rent",
            "  Day total: Income $0.00 | Expenses $1,234.50 | Balance -$1,234.50",
            "",
            LIGHT,
            "10/01/2024",
            LIGHT,
            "  Expense  -$40.00        Food",
            "           Notes: Lunch",
            "  Income   +$100.00       Salary",
            "  Day total: Income $100.00 | Expenses $40.00 | Balance $60.00",
            "",
            HEAVY,
            "End of report",
        ]) + "\n"
        assert ReportFormatter("USD").render(ledger, NOW) == expected

    def test_whitespace_notes_are_omitted(self, ledger):
        text = ReportFormatter("USD").render(ledger, NOW)
        assert text.count("Notes:") == 1

    def test_currency_symbol_is_a_label_only(self, ledger):
        text = ReportFormatter("INR").render(ledger, NOW)
        assert "  Total Expenses:   ₹1,274.50" in text
        assert "$" not in text

    def test_unknown_currency_uses_dollar(self, ledger):
        text = ReportFormatter("JPY").render(ledger, NOW)
        assert "  Total Income:     $100.00" in text

    def test_thousands_grouping(self, make_txn):
        text = ReportFormatter("EUR").render(
            [make_txn(amount=1234567.891, kind=INCOME, category="Bonus")], NOW
        )
        assert "  Total Income:     €1,234,567.89" in text

    def test_invalid_amount_is_listed_but_not_counted(self, make_txn):
        ledger = [
            make_txn(amount=40, kind=EXPENSE, category="Food"),
            make_txn(amount=-5, kind=EXPENSE, category="Broken"),
        ]
        text = ReportFormatter("USD").render(ledger, NOW)
        assert "$-5 [not counted]" in text
        assert "  Total Expenses:   $40.00" in text
        assert "  Transactions:     2" in text

    def test_custom_title(self, ledger):
        formatter = ReportFormatter("USD", title="Household Ledger")
        first_line = formatter.render(ledger, NOW).splitlines()[0]
        assert first_line == "Household Ledger - snapshot as of 15 Jan 2024"


class TestReportDeterminism:
    """Only the title line depends on the generation date."""

    def test_same_input_same_text(self, ledger):
        formatter = ReportFormatter("USD")
        assert formatter.render(ledger, NOW) == formatter.render(ledger, NOW)

    def test_only_title_changes_with_generation_date(self, ledger):
        formatter = ReportFormatter("USD")
        today = formatter.render(ledger, NOW).splitlines()
        later = formatter.render(ledger, datetime(2025, 3, 2, 8, 0)).splitlines()
        assert today[0] != later[0]
        assert later[0] == "Ledger Report - snapshot as of 02 Mar 2025"
        assert today[1:] == later[1:]


class TestEmptyLedger:
    """An empty ledger is signalled, not rendered."""

    def test_render_raises(self):
        with pytest.raises(NoTransactionsError):
            ReportFormatter("USD").render([], NOW)

    def test_share_payload_raises(self):
        with pytest.raises(NoTransactionsError):
            ReportFormatter("USD").share_payload([], NOW)


class TestSharePayload:
    """Tests for the export payload."""

    def test_title_and_text(self, ledger):
        payload = ReportFormatter("USD").share_payload(ledger, NOW)
        assert payload.title == "Ledger Report 15 Jan 2024"
        assert payload.text.startswith("Ledger Report - snapshot as of 15 Jan 2024\n")
        assert payload.text.endswith("End of report\n")

    def test_snapshot_date(self):
        assert snapshot_date(datetime(2026, 10, 9)) == "09 Oct 2026"
