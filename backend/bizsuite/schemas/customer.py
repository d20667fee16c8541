from typing import Optional
from datetime import datetime

from bizsuite.schemas.base import RecordModel


class Customer(RecordModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    kra_pin: Optional[str] = None
    address: Optional[str] = None # Comma separated; printed one part per line
    credit_limit: float = 0
    balance: float = 0
    is_active: bool = True
    company_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Supplier(RecordModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    kra_pin: Optional[str] = None
    address: Optional[str] = None
    balance: float = 0
    is_active: bool = True
    company_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
