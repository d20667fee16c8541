from pydantic import Field
from typing import Optional
from datetime import datetime
from enum import Enum

from bizsuite.schemas.base import CamelModel, RecordModel


class PaymentMethodEnum(str, Enum):
    CASH = "cash"
    MPESA = "mpesa"
    BANK = "bank"
    CHEQUE = "cheque"
    CARD = "card"


class Payment(RecordModel):
    id: Optional[str] = None
    amount: float
    method: PaymentMethodEnum
    reference: str
    notes: Optional[str] = None
    invoice_id: Optional[str] = None
    customer_id: Optional[str] = None
    company_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


# Properties to receive when recording a payment against an invoice
class PaymentCreate(CamelModel):
    invoice_id: str
    amount: float = Field(..., gt=0)
    method: PaymentMethodEnum
    reference: str = Field(..., min_length=1)
    notes: Optional[str] = None
    payment_date: Optional[datetime] = None
