# backend/bizsuite/api/endpoints/payments.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any

from bizsuite import schemas
from bizsuite.api import deps
from bizsuite.services.business_data_service import BusinessDataService
from bizsuite.services.financials import payment_rejection_reason

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=schemas.Payment, status_code=status.HTTP_201_CREATED)
async def record_payment(
    *,
    payment_in: schemas.PaymentCreate,
    data_service: BusinessDataService = Depends(deps.get_data_service)
) -> Any:
    """
    Record a payment against an invoice. The amount may not exceed the
    invoice's outstanding balance, and paid or cancelled invoices take no
    further payments.
    """
    invoice = await data_service.get_invoice_by_id(payment_in.invoice_id)
    if not invoice:
        raise await deps.missing_record_error(data_service, "Invoice not found")

    reason = payment_rejection_reason(invoice, payment_in.amount)
    if reason:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=reason)

    payment = await data_service.process_payment(
        invoice_id=payment_in.invoice_id,
        amount=payment_in.amount,
        method=payment_in.method.value,
        reference=payment_in.reference,
        notes=payment_in.notes,
    )
    if not payment:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="The business API did not record the payment.")

    await data_service.add_activity_log({
        "type": "payment",
        "description": f"Payment {payment_in.reference} of {payment_in.amount:,.2f} recorded for invoice {invoice.invoice_number}",
        "referenceId": payment.id,
    })
    logger.info(f"Recorded {payment_in.method.value} payment {payment_in.reference} for invoice {invoice.invoice_number}")
    return payment
