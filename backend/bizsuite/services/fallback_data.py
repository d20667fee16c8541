# Canned records served when the upstream API is unreachable.
# Only products, suppliers, dashboard metrics and the activity log fall back to these.
from datetime import datetime
from typing import List

from bizsuite.schemas.customer import Supplier
from bizsuite.schemas.dashboard import ActivityLogEntry, DashboardMetrics
from bizsuite.schemas.product import Product

_SEEDED_AT = datetime(2024, 1, 1, 8, 0, 0)


def fallback_products() -> List[Product]:
    return [
        Product(
            id="fallback-prod-1", name="Latex Examination Gloves (Box of 100)", sku="MED-GLV-001",
            category="Medical Supplies", unit="Box", purchase_price=650, selling_price=850,
            min_stock=20, max_stock=500, current_stock=120, tax_rate=16,
        ),
        Product(
            id="fallback-prod-2", name="Digital Thermometer", sku="MED-THM-002",
            category="Diagnostic Equipment", unit="Piece", purchase_price=900, selling_price=1250,
            min_stock=10, max_stock=200, current_stock=8, tax_rate=16,
        ),
        Product(
            id="fallback-prod-3", name="Surgical Face Masks (Pack of 50)", sku="MED-MSK-003",
            category="Medical Supplies", unit="Pack", purchase_price=300, selling_price=450,
            min_stock=50, max_stock=1000, current_stock=340, tax_rate=16,
        ),
        Product(
            id="fallback-prod-4", name="Laboratory Test Tubes (Pack of 100)", sku="LAB-TTB-004",
            category="Laboratory Supplies", unit="Pack", purchase_price=1200, selling_price=1650,
            min_stock=5, max_stock=100, current_stock=25, tax_rate=16,
        ),
    ]


def fallback_suppliers() -> List[Supplier]:
    return [
        Supplier(
            id="fallback-sup-1", name="Nairobi Medical Distributors", email="orders@nbimedical.co.ke",
            phone="+254 700 000 001", address="Industrial Area, Nairobi, Kenya", balance=0,
        ),
        Supplier(
            id="fallback-sup-2", name="East Africa Lab Supplies", email="sales@ealabsupplies.co.ke",
            phone="+254 700 000 002", address="Mombasa Road, Nairobi, Kenya", balance=0,
        ),
    ]


def fallback_dashboard_metrics() -> DashboardMetrics:
    return DashboardMetrics.model_validate({
        "total_revenue": 0,
        "outstanding_invoices": 0,
        "low_stock_alerts": 1,
        "recent_payments": 0,
        "sales_trend": [],
        "top_products": [
            {"name": "Latex Examination Gloves (Box of 100)", "sales": 0},
            {"name": "Surgical Face Masks (Pack of 50)", "sales": 0},
        ],
        "recent_activities": [],
    })


def fallback_activity_log() -> List[ActivityLogEntry]:
    return [
        ActivityLogEntry(
            id="fallback-activity-1", type="system",
            description="Business API unavailable; showing offline data", user="system",
            timestamp=_SEEDED_AT,
        ),
    ]
