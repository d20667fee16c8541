from pydantic import Field
from typing import List, Optional
from datetime import date
from enum import Enum

from bizsuite.schemas.base import CamelModel
from bizsuite.schemas.customer import Customer


class StatementEntryTypeEnum(str, Enum):
    INVOICE = "invoice"
    PAYMENT = "payment"

class StatementEntryStatusEnum(str, Enum):
    PAID = "paid"
    OVERDUE = "overdue"
    CURRENT = "current"

class StatementStatusFilterEnum(str, Enum):
    ALL = "all"
    PAID = "paid"
    OVERDUE = "overdue"
    CURRENT = "current"

class AgingBucketEnum(str, Enum):
    ALL = "all"
    DAYS_0_30 = "0-30"
    DAYS_30_60 = "30-60"
    DAYS_60_90 = "60-90"
    DAYS_90_ABOVE = "90-above"


class StatementFilter(CamelModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: StatementStatusFilterEnum = StatementStatusFilterEnum.ALL
    aging: AgingBucketEnum = AgingBucketEnum.ALL

class StatementEntry(CamelModel):
    date: date
    type: StatementEntryTypeEnum
    reference: str
    description: str
    debit: float = 0
    credit: float = 0
    balance: float = 0 # Running balance after this entry
    due_date: Optional[date] = None
    status: Optional[StatementEntryStatusEnum] = None
    days_past_due: int = 0
    outstanding: float = 0 # Invoice total less payments linked to it

class AgingSummary(CamelModel):
    # Keyed by bucket label on the wire
    days_0_30: float = Field(0, alias="0-30")
    days_30_60: float = Field(0, alias="30-60")
    days_60_90: float = Field(0, alias="60-90")
    days_90_above: float = Field(0, alias="90-above")

class StatementOfAccount(CamelModel):
    customer: Customer
    statement_date: date
    filters: StatementFilter
    entries: List[StatementEntry] = []
    opening_balance: float = 0
    total_debits: float = 0
    total_credits: float = 0
    closing_balance: float = 0
    aging: AgingSummary
