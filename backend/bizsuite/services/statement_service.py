# backend/bizsuite/services/statement_service.py
import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from bizsuite.schemas.customer import Customer
from bizsuite.schemas.invoice import Invoice
from bizsuite.schemas.payment import Payment
from bizsuite.schemas.statement import (
    AgingBucketEnum,
    AgingSummary,
    StatementEntry,
    StatementEntryStatusEnum,
    StatementEntryTypeEnum,
    StatementFilter,
    StatementOfAccount,
    StatementStatusFilterEnum,
)

logger = logging.getLogger(__name__)


def _to_date(value: Optional[Union[date, datetime]]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def _in_aging_bucket(days: int, bucket: AgingBucketEnum) -> bool:
    if bucket == AgingBucketEnum.DAYS_0_30:
        return days <= 30
    if bucket == AgingBucketEnum.DAYS_30_60:
        return 30 < days <= 60
    if bucket == AgingBucketEnum.DAYS_60_90:
        return 60 < days <= 90
    if bucket == AgingBucketEnum.DAYS_90_ABOVE:
        return days > 90
    return True


def build_statement_entries(
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    today: date,
) -> List[StatementEntry]:
    """
    Invoices become debits and payments credits, sorted by date with a running balance.
    Invoices sort ahead of payments made on the same day.
    """
    invoices = list(invoices)
    payments = list(payments)
    entries: List[StatementEntry] = []

    for invoice in invoices:
        paid = sum(p.amount for p in payments if p.invoice_id is not None and p.invoice_id == invoice.id)
        outstanding = invoice.total - paid
        due = _to_date(invoice.due_date)
        days_past_due = (today - due).days if due else 0

        if outstanding <= 0:
            status = StatementEntryStatusEnum.PAID
        elif due and due < today:
            status = StatementEntryStatusEnum.OVERDUE
        else:
            status = StatementEntryStatusEnum.CURRENT

        entries.append(StatementEntry(
            date=_to_date(invoice.issue_date) or _to_date(invoice.created_at) or today,
            type=StatementEntryTypeEnum.INVOICE,
            reference=invoice.invoice_number,
            description=f"Invoice {invoice.invoice_number}",
            debit=invoice.total,
            due_date=due,
            status=status,
            days_past_due=max(days_past_due, 0),
            outstanding=max(outstanding, 0),
        ))

    invoice_numbers = {inv.id: inv.invoice_number for inv in invoices if inv.id}
    for payment in payments:
        linked_number = invoice_numbers.get(payment.invoice_id) if payment.invoice_id else None
        description = f"Payment for {linked_number}" if linked_number else f"Payment - {payment.method.value}"
        entries.append(StatementEntry(
            date=_to_date(payment.created_at) or today,
            type=StatementEntryTypeEnum.PAYMENT,
            reference=payment.reference or payment.id or "",
            description=description,
            credit=payment.amount,
        ))

    entries.sort(key=lambda e: (e.date, e.type != StatementEntryTypeEnum.INVOICE))

    running_balance = 0.0
    for entry in entries:
        running_balance += entry.debit - entry.credit
        entry.balance = running_balance
    return entries


def filter_statement_entries(entries: List[StatementEntry], filters: StatementFilter, today: date) -> List[StatementEntry]:
    filtered = list(entries)

    if filters.start_date:
        filtered = [e for e in filtered if e.date >= filters.start_date]
    if filters.end_date:
        filtered = [e for e in filtered if e.date <= filters.end_date]

    if filters.status != StatementStatusFilterEnum.ALL:
        wanted = filters.status.value
        filtered = [
            e for e in filtered
            if (e.type == StatementEntryTypeEnum.PAYMENT and wanted == "paid")
            or (e.status is not None and e.status.value == wanted)
        ]

    if filters.aging != AgingBucketEnum.ALL:
        # Age is counted from the entry date
        filtered = [
            e for e in filtered
            if e.type == StatementEntryTypeEnum.INVOICE
            and e.outstanding > 0
            and _in_aging_bucket((today - e.date).days, filters.aging)
        ]
    return filtered


def calculate_aging(entries: Iterable[StatementEntry]) -> AgingSummary:
    """Outstanding invoice amounts bucketed by days past due."""
    aging = AgingSummary()
    for entry in entries:
        if entry.type != StatementEntryTypeEnum.INVOICE or entry.outstanding <= 0 or entry.due_date is None:
            continue
        days = entry.days_past_due
        if days <= 30:
            aging.days_0_30 += entry.outstanding
        elif days <= 60:
            aging.days_30_60 += entry.outstanding
        elif days <= 90:
            aging.days_60_90 += entry.outstanding
        else:
            aging.days_90_above += entry.outstanding
    return aging


def build_statement(
    customer: Customer,
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    filters: Optional[StatementFilter] = None,
    today: Optional[date] = None,
) -> StatementOfAccount:
    """
    Statement of account for one customer.
    Invoices and payments belonging to other customers are ignored.
    """
    filters = filters or StatementFilter()
    today = today or date.today()

    customer_invoices = [inv for inv in invoices if (inv.customer_id or inv.customer.id) == customer.id]
    invoice_ids = {inv.id for inv in customer_invoices if inv.id}
    customer_payments = [
        p for p in payments
        if p.customer_id == customer.id or (p.invoice_id is not None and p.invoice_id in invoice_ids)
    ]

    all_entries = build_statement_entries(customer_invoices, customer_payments, today)
    entries = filter_statement_entries(all_entries, filters, today)

    opening_balance = 0.0
    if filters.start_date:
        earlier = [e for e in all_entries if e.date < filters.start_date]
        if earlier:
            opening_balance = earlier[-1].balance

    logger.debug(f"Statement for customer {customer.id}: {len(entries)} of {len(all_entries)} entries after filters")
    return StatementOfAccount(
        customer=customer,
        statement_date=today,
        filters=filters,
        entries=entries,
        opening_balance=opening_balance,
        total_debits=sum(e.debit for e in entries),
        total_credits=sum(e.credit for e in entries),
        closing_balance=entries[-1].balance if entries else opening_balance,
        aging=calculate_aging(entries),
    )
