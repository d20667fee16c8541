"""
Tests for statements of account: running balance, statuses, filters and aging.
"""
from datetime import date, datetime

import pytest

from bizsuite.schemas import (
    AgingBucketEnum,
    Customer,
    StatementEntryStatusEnum,
    StatementEntryTypeEnum,
    StatementFilter,
    StatementStatusFilterEnum,
)
from bizsuite.services.statement_service import build_statement, build_statement_entries, calculate_aging

TODAY = date(2024, 6, 30)


@pytest.fixture
def ledger(make_invoice, make_payment):
    """Three invoices (one settled, one overdue, one current) and two payments."""
    invoices = [
        make_invoice(id="inv-1", invoice_number="INV-001", total=1000.0,
                     issue_date=datetime(2024, 1, 10), due_date=datetime(2024, 2, 9)),
        make_invoice(id="inv-2", invoice_number="INV-002", total=2500.0,
                     issue_date=datetime(2024, 3, 1), due_date=datetime(2024, 3, 31)),
        make_invoice(id="inv-3", invoice_number="INV-003", total=800.0,
                     issue_date=datetime(2024, 6, 20), due_date=datetime(2024, 7, 20)),
    ]
    payments = [
        make_payment(id="pay-1", reference="MP-1", amount=1000.0, invoice_id="inv-1", created_at=datetime(2024, 2, 1)),
        make_payment(id="pay-2", reference="MP-2", amount=500.0, invoice_id="inv-2", created_at=datetime(2024, 3, 1)),
    ]
    return invoices, payments


class TestEntries:
    def test_chronological_with_running_balance(self, ledger):
        invoices, payments = ledger
        entries = build_statement_entries(invoices, payments, TODAY)
        assert [e.reference for e in entries] == ["INV-001", "MP-1", "INV-002", "MP-2", "INV-003"]
        assert [e.balance for e in entries] == [1000.0, 0.0, 2500.0, 2000.0, 2800.0]

    def test_invoice_sorts_before_payment_on_same_day(self, ledger):
        entries = build_statement_entries(*ledger, TODAY)
        same_day = [e for e in entries if e.date == date(2024, 3, 1)]
        assert [e.type for e in same_day] == [StatementEntryTypeEnum.INVOICE, StatementEntryTypeEnum.PAYMENT]

    def test_invoice_statuses(self, ledger):
        entries = {e.reference: e for e in build_statement_entries(*ledger, TODAY)}
        assert entries["INV-001"].status == StatementEntryStatusEnum.PAID
        assert entries["INV-002"].status == StatementEntryStatusEnum.OVERDUE
        assert entries["INV-002"].days_past_due == 91
        assert entries["INV-002"].outstanding == 2000.0
        assert entries["INV-003"].status == StatementEntryStatusEnum.CURRENT
        assert entries["MP-2"].description == "Payment for INV-002"


class TestBuildStatement:
    def test_totals_and_closing_balance(self, customer, ledger):
        statement = build_statement(customer, *ledger, today=TODAY)
        assert statement.total_debits == 4300.0
        assert statement.total_credits == 1500.0
        assert statement.closing_balance == 2800.0
        assert statement.opening_balance == 0

    def test_aging_buckets_outstanding_amounts(self, customer, ledger):
        aging = build_statement(customer, *ledger, today=TODAY).aging
        assert aging.days_0_30 == 800.0
        assert aging.days_90_above == 2000.0
        assert aging.days_30_60 == 0 and aging.days_60_90 == 0

    def test_aging_serialises_with_bucket_labels(self, customer, ledger):
        dumped = build_statement(customer, *ledger, today=TODAY).model_dump(by_alias=True)
        assert dumped["aging"] == {"0-30": 800.0, "30-60": 0, "60-90": 0, "90-above": 2000.0}

    def test_start_date_sets_opening_balance(self, customer, ledger):
        statement = build_statement(customer, *ledger, StatementFilter(start_date=date(2024, 3, 1)), TODAY)
        assert [e.reference for e in statement.entries] == ["INV-002", "MP-2", "INV-003"]
        assert statement.opening_balance == 0.0
        later = build_statement(customer, *ledger, StatementFilter(start_date=date(2024, 6, 1)), TODAY)
        assert later.opening_balance == 2000.0
        assert later.closing_balance == 2800.0

    def test_status_filter(self, customer, ledger):
        overdue = build_statement(customer, *ledger, StatementFilter(status=StatementStatusFilterEnum.OVERDUE), TODAY)
        assert [e.reference for e in overdue.entries] == ["INV-002"]
        paid = build_statement(customer, *ledger, StatementFilter(status=StatementStatusFilterEnum.PAID), TODAY)
        assert [e.reference for e in paid.entries] == ["INV-001", "MP-1", "MP-2"]

    def test_aging_filter(self, customer, ledger):
        statement = build_statement(customer, *ledger, StatementFilter(aging=AgingBucketEnum.DAYS_90_ABOVE), TODAY)
        assert [e.reference for e in statement.entries] == ["INV-002"]

    def test_other_customers_are_ignored(self, customer, ledger, make_invoice):
        invoices, payments = ledger
        stranger = Customer(id="cust-2", name="Other Clinic")
        invoices = invoices + [make_invoice(id="inv-9", invoice_number="INV-009", customer_id="cust-2", customer=stranger)]
        statement = build_statement(customer, invoices, payments, today=TODAY)
        assert "INV-009" not in [e.reference for e in statement.entries]

    def test_empty_statement(self, customer):
        statement = build_statement(customer, [], [], today=TODAY)
        assert statement.entries == []
        assert statement.closing_balance == 0


def test_aging_ignores_payments_and_settled_invoices(ledger):
    entries = build_statement_entries(*ledger, TODAY)
    aging = calculate_aging(e for e in entries if e.reference in ("INV-001", "MP-1"))
    assert aging.model_dump() == {"days_0_30": 0, "days_30_60": 0, "days_60_90": 0, "days_90_above": 0}
