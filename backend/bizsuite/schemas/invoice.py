from pydantic import Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from bizsuite.schemas.base import CamelModel, RecordModel
from bizsuite.schemas.customer import Customer
from bizsuite.schemas.product import Product

# --- Enums for sales documents ---
class InvoiceStatusEnum(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"

class QuotationStatusEnum(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"

class ProformaStatusEnum(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    CONVERTED = "converted"
    EXPIRED = "expired"


# --- Line items ---
class LineItemTax(CamelModel):
    id: str
    name: str
    rate: float # Percentage
    amount: float = 0
    is_compound_tax: bool = False # Applied on base + non-compound taxes

class InvoiceItem(RecordModel):
    id: Optional[str] = None
    product_id: Optional[str] = None
    product: Product # Required: every printed row reads product name and unit
    quantity: float = Field(..., ge=0)
    unit_price: float
    discount: float = 0 # Percentage
    vat_rate: float = 0
    line_item_taxes: Optional[List[LineItemTax]] = None
    total: float


# --- Documents ---
class SalesDocumentBase(RecordModel):
    id: Optional[str] = None # Drafts built locally have no id yet
    customer_id: Optional[str] = None
    customer: Customer
    items: List[InvoiceItem] = []
    subtotal: float = 0
    vat_amount: float = 0
    discount_amount: float = 0
    additional_tax_amount: Optional[float] = None
    total: float = 0
    issue_date: Optional[datetime] = None
    notes: Optional[str] = None
    company_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class Invoice(SalesDocumentBase):
    invoice_number: str
    amount_paid: float = 0
    balance: float = 0
    status: InvoiceStatusEnum = InvoiceStatusEnum.DRAFT
    due_date: Optional[datetime] = None
    lpo_number: Optional[str] = None
    etims_status: Optional[str] = None
    etims_code: Optional[str] = None

class Quotation(SalesDocumentBase):
    quote_number: str
    status: QuotationStatusEnum = QuotationStatusEnum.DRAFT
    valid_until: Optional[datetime] = None

class ProformaInvoice(SalesDocumentBase):
    proforma_number: str
    status: ProformaStatusEnum = ProformaStatusEnum.DRAFT
    valid_until: Optional[datetime] = None
