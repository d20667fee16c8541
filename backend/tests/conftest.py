"""
Pytest configuration and fixtures for the Business Suite backend tests.
"""
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from bizsuite.api import deps
from bizsuite.core.company import get_default_company_settings
from bizsuite.core.config import Settings
from bizsuite.main import create_app
from bizsuite.schemas import (
    Customer,
    Invoice,
    InvoiceItem,
    InvoiceStatusEnum,
    Payment,
    PaymentMethodEnum,
    ProformaInvoice,
    ProformaStatusEnum,
    Product,
    Quotation,
    QuotationStatusEnum,
    TemplateDesign,
)
from bizsuite.services import pdf_service as pdf_service_module
from bizsuite.services.business_data_service import BusinessDataService
from bizsuite.services.pdf_service import PDFService
from bizsuite.services.template_manager import TemplateManager

FAKE_PDF = b"%PDF-1.7\n% generated in tests\n%%EOF"


# --- Services ---
@pytest.fixture
def company():
    return get_default_company_settings()


@pytest.fixture
def pdf_service(company):
    return PDFService(company, currency_code="KES")


@pytest.fixture
def template_manager(pdf_service):
    """
    Fresh registry per test, seeded with the built-in defaults.
    """
    return TemplateManager(pdf_service)


@pytest.fixture
def fake_pdf(monkeypatch):
    """
    Replace WeasyPrint with a stub; returns the list of HTML strings it was given.
    """
    rendered = []

    def _html_to_pdf(html, base_url=None):
        rendered.append(html)
        return FAKE_PDF

    monkeypatch.setattr(pdf_service_module, "html_to_pdf", _html_to_pdf)
    return rendered


@pytest.fixture
def design():
    return TemplateDesign.model_validate({
        "layout": "modern",
        "colors": {"primary": "#2563eb", "secondary": "#64748b", "accent": "#10b981", "text": "#1e293b"},
        "fonts": {"heading": "helvetica", "body": "helvetica", "size": {"heading": 18, "body": 10, "small": 8}},
        "spacing": {"margins": 15, "lineHeight": 1.3, "sectionGap": 6},
        "header": {"showLogo": True, "logoPosition": "left", "showCompanyInfo": True},
        "footer": {"showTerms": True, "showSignature": True, "showPageNumbers": True},
        "table": {"headerBackgroundColor": "#2563eb", "alternateRowColor": "#f8fafc", "borderStyle": "light"},
    })


# --- Business records ---
@pytest.fixture
def customer():
    return Customer(
        id="cust-1",
        name="Nairobi West Hospital",
        email="accounts@nairobiwest.co.ke",
        address="P.O Box 43375-00100, Gandhi Avenue, Nairobi",
    )


@pytest.fixture
def make_item():
    def _make(name="Digital Thermometer", quantity=2, unit_price=1250.0, vat_rate=16, unit="Piece", **kwargs):
        product = Product(id=f"prod-{name[:8].lower()}", name=name, unit=unit, selling_price=unit_price)
        return InvoiceItem(
            product=product,
            product_id=product.id,
            quantity=quantity,
            unit_price=unit_price,
            vat_rate=vat_rate,
            total=quantity * unit_price,
            **kwargs,
        )
    return _make


def _totals(items):
    subtotal = sum(item.total for item in items)
    vat = round(subtotal * 0.16, 2)
    return {"subtotal": subtotal, "vat_amount": vat, "total": round(subtotal + vat, 2)}


@pytest.fixture
def make_invoice(customer, make_item):
    def _make(**overrides):
        items = overrides.pop("items") if "items" in overrides else [make_item()]
        fields = {
            "id": "inv-1",
            "invoice_number": "INV-2024-001",
            "customer_id": customer.id,
            "customer": customer,
            "items": items,
            "status": InvoiceStatusEnum.SENT,
            "issue_date": datetime(2024, 3, 1),
            "due_date": datetime(2024, 3, 31),
            "lpo_number": "LPO-7781",
            **_totals(items),
        }
        fields["balance"] = fields["total"]
        fields.update(overrides)
        return Invoice(**fields)
    return _make


@pytest.fixture
def make_quotation(customer, make_item):
    def _make(**overrides):
        items = overrides.pop("items") if "items" in overrides else [make_item()]
        fields = {
            "id": "quo-1",
            "quote_number": "QUO-2024-014",
            "customer_id": customer.id,
            "customer": customer,
            "items": items,
            "status": QuotationStatusEnum.ACCEPTED,
            "issue_date": datetime(2024, 3, 1),
            "valid_until": datetime(2099, 1, 1),
            **_totals(items),
        }
        fields.update(overrides)
        return Quotation(**fields)
    return _make


@pytest.fixture
def make_proforma(customer, make_item):
    def _make(**overrides):
        items = overrides.pop("items") if "items" in overrides else [make_item()]
        fields = {
            "id": "pro-1",
            "proforma_number": "PRO-2024-003",
            "customer_id": customer.id,
            "customer": customer,
            "items": items,
            "status": ProformaStatusEnum.SENT,
            "issue_date": datetime(2024, 3, 1),
            "valid_until": datetime(2099, 1, 1),
            **_totals(items),
        }
        fields.update(overrides)
        return ProformaInvoice(**fields)
    return _make


@pytest.fixture
def make_payment(customer):
    def _make(**overrides):
        fields = {
            "id": "pay-1",
            "amount": 1000.0,
            "method": PaymentMethodEnum.MPESA,
            "reference": "QGH7TY2K9L",
            "invoice_id": "inv-1",
            "customer_id": customer.id,
            "created_at": datetime(2024, 3, 10),
        }
        fields.update(overrides)
        return Payment(**fields)
    return _make


# --- API ---
@pytest.fixture
def data_service():
    """
    Test double for the upstream data service; async methods are AsyncMocks.
    """
    service = MagicMock(spec=BusinessDataService)
    service.test_connection.return_value = True
    return service


@pytest.fixture
def app(data_service):
    application = create_app(Settings(USE_FALLBACK_DATA=False))
    application.dependency_overrides[deps.get_data_service] = lambda: data_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_prefix():
    return Settings().API_V1_STR
