from typing import List, Optional
from datetime import datetime

from bizsuite.schemas.base import CamelModel, RecordModel


class SalesTrendPoint(CamelModel):
    date: str
    amount: float

class TopProduct(CamelModel):
    name: str
    sales: float

class RecentActivity(CamelModel):
    id: str
    type: str
    description: str
    timestamp: datetime

class DashboardMetrics(CamelModel):
    total_revenue: float = 0
    outstanding_invoices: float = 0
    low_stock_alerts: int = 0
    recent_payments: float = 0
    sales_trend: List[SalesTrendPoint] = []
    top_products: List[TopProduct] = []
    recent_activities: List[RecentActivity] = []


class ActivityLogEntry(RecordModel):
    id: str
    type: str
    description: str
    user: Optional[str] = None
    timestamp: Optional[datetime] = None
