# backend/bizsuite/services/conversion_service.py
"""
Quotation -> proforma -> invoice conversions.

The upstream API performs the real conversion; the drafts built here back the
preview endpoints and the convertibility checks done before forwarding.
"""
import secrets
from datetime import datetime, timedelta
from typing import List, Optional, Union

from pydantic import BaseModel

from bizsuite.schemas.invoice import (
    Invoice,
    InvoiceStatusEnum,
    ProformaInvoice,
    ProformaStatusEnum,
    Quotation,
    QuotationStatusEnum,
)
from bizsuite.utils.helpers import as_utc, utc_now

VALIDITY_DAYS = 30


class ConversionOption(BaseModel):
    label: str
    action: str
    description: str


def generate_document_number(prefix: str, now: Optional[datetime] = None) -> str:
    """PREFIX-YYYY-NNN with a random three digit sequence."""
    year = (now or utc_now()).year
    return f"{prefix}-{year}-{secrets.randbelow(1000):03d}"


def _still_valid(valid_until: Optional[datetime], now: datetime) -> bool:
    return valid_until is not None and as_utc(valid_until) > as_utc(now)


def can_convert_quotation(quotation: Quotation, now: Optional[datetime] = None) -> bool:
    now = now or utc_now()
    return (
        quotation.status == QuotationStatusEnum.ACCEPTED
        and _still_valid(quotation.valid_until, now)
        and len(quotation.items) > 0
    )


def can_convert_proforma(proforma: ProformaInvoice, now: Optional[datetime] = None) -> bool:
    now = now or utc_now()
    return (
        proforma.status == ProformaStatusEnum.SENT
        and _still_valid(proforma.valid_until, now)
        and len(proforma.items) > 0
    )


def get_conversion_options(
    document: Union[Quotation, ProformaInvoice], now: Optional[datetime] = None
) -> List[ConversionOption]:
    options: List[ConversionOption] = []
    if isinstance(document, Quotation) and can_convert_quotation(document, now):
        options.append(ConversionOption(
            label="Convert to Proforma",
            action="convert_to_proforma",
            description="Create a proforma invoice for advance billing",
        ))
        options.append(ConversionOption(
            label="Convert to Invoice",
            action="convert_to_invoice",
            description="Create a formal invoice directly",
        ))
    elif isinstance(document, ProformaInvoice) and can_convert_proforma(document, now):
        options.append(ConversionOption(
            label="Convert to Invoice",
            action="convert_to_invoice",
            description="Create a formal invoice from this proforma",
        ))
    return options


def _carried_fields(source: Union[Quotation, ProformaInvoice]) -> dict:
    return {
        "customer_id": source.customer_id,
        "customer": source.customer.model_copy(deep=True),
        "items": [item.model_copy(deep=True) for item in source.items],
        "subtotal": source.subtotal,
        "vat_amount": source.vat_amount,
        "discount_amount": source.discount_amount,
        "additional_tax_amount": source.additional_tax_amount,
        "total": source.total,
        "company_id": source.company_id,
        "created_by": source.created_by,
    }


def convert_quotation_to_proforma(quotation: Quotation, now: Optional[datetime] = None) -> ProformaInvoice:
    now = now or utc_now()
    return ProformaInvoice(
        proforma_number=generate_document_number("PRO", now),
        status=ProformaStatusEnum.DRAFT,
        valid_until=now + timedelta(days=VALIDITY_DAYS),
        issue_date=now,
        notes=f"Converted from quotation {quotation.quote_number}",
        created_at=now,
        updated_at=now,
        **_carried_fields(quotation),
    )


def _invoice_from(source: Union[Quotation, ProformaInvoice], source_label: str, now: datetime) -> Invoice:
    return Invoice(
        invoice_number=generate_document_number("INV", now),
        amount_paid=0,
        balance=source.total,
        status=InvoiceStatusEnum.DRAFT,
        due_date=now + timedelta(days=VALIDITY_DAYS),
        issue_date=now,
        notes=f"Converted from {source_label}",
        etims_status="pending",
        created_at=now,
        updated_at=now,
        **_carried_fields(source),
    )


def convert_proforma_to_invoice(proforma: ProformaInvoice, now: Optional[datetime] = None) -> Invoice:
    return _invoice_from(proforma, f"proforma {proforma.proforma_number}", now or utc_now())


def convert_quotation_to_invoice(quotation: Quotation, now: Optional[datetime] = None) -> Invoice:
    return _invoice_from(quotation, f"quotation {quotation.quote_number}", now or utc_now())
