from typing import Optional, List
from datetime import datetime
from enum import Enum

from bizsuite.schemas.base import RecordModel


class StockMovementTypeEnum(str, Enum):
    IN = "in"
    OUT = "out"
    ADJUSTMENT = "adjustment"


class Product(RecordModel):
    id: str
    name: str
    description: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    category_id: Optional[str] = None
    unit: Optional[str] = None # "Piece" is printed when missing
    purchase_price: float = 0
    selling_price: float = 0
    min_stock: float = 0
    max_stock: float = 0
    current_stock: float = 0
    taxable: bool = True
    tax_rate: Optional[float] = None
    tags: Optional[List[str]] = None
    is_active: bool = True
    status: Optional[str] = None
    company_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductCategory(RecordModel):
    id: str
    name: str
    description: Optional[str] = None
    parent_id: Optional[str] = None
    company_id: Optional[str] = None


class StockMovement(RecordModel):
    id: str
    product_id: str
    type: StockMovementTypeEnum
    quantity: float
    previous_stock: Optional[float] = None
    new_stock: Optional[float] = None
    reference: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
