# backend/bizsuite/services/business_data_service.py
"""
Async client for the upstream business REST API.

Every method maps one-to-one onto an HTTP call. Responses arrive wrapped in a
``{"data": ...}`` envelope which is unwrapped here.

Failure handling differs per endpoint and is kept that way on purpose:

* raise ``BusinessDataError``: customers, invoices, quotations, credit notes,
  categories, statement of account, every create/update, stock updates,
  sample data and category setup
* canned fallback data (``USE_FALLBACK_DATA``): products, suppliers,
  dashboard metrics, activity log
* empty list: proformas, payments, stock movements, low stock products
* ``None``: lookups by id, conversions, process_payment
* ``False``: deletes
* swallowed: add_activity_log
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel

from bizsuite.core.errors import BusinessDataError
from bizsuite.schemas.customer import Customer, Supplier
from bizsuite.schemas.dashboard import ActivityLogEntry, DashboardMetrics
from bizsuite.schemas.invoice import Invoice, ProformaInvoice, Quotation
from bizsuite.schemas.payment import Payment
from bizsuite.schemas.product import Product, ProductCategory, StockMovement
from bizsuite.schemas.statement import StatementFilter
from bizsuite.services import fallback_data

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Body = Union[BaseModel, Dict[str, Any]]


def _to_body(data: Body) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_none=True, mode="json")
    return data


def _failed(message: str, error: BusinessDataError) -> BusinessDataError:
    return BusinessDataError(f"{message}: {error.args[0]}", endpoint=error.endpoint, status_code=error.status_code, detail=error.detail)


def _normalize_customer(raw: Dict[str, Any]) -> Dict[str, Any]:
    """The API reports balance as currentBalance and numbers as strings."""
    customer = dict(raw)
    current_balance = customer.pop("currentBalance", None)
    customer["balance"] = float(current_balance or customer.get("balance") or 0)
    customer["creditLimit"] = float(customer.get("creditLimit") or 0)
    return customer


def _normalize_quotation_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """The quotation list endpoint returns raw snake_case columns; items are not included."""
    return {
        "id": row.get("id"),
        "quoteNumber": row.get("quote_number"),
        "customerId": row.get("customer_id"),
        "customer": {
            "id": row.get("customer_id"),
            "name": row.get("customer_name") or "",
            "email": row.get("customer_email"),
        },
        "items": [],
        "subtotal": float(row.get("subtotal") or 0),
        "vatAmount": float(row.get("vat_amount") or 0),
        "discountAmount": float(row.get("discount_amount") or 0),
        "total": float(row.get("total_amount") or 0),
        "status": row.get("status") or "draft",
        "validUntil": row.get("valid_until"),
        "issueDate": row.get("issue_date"),
        "notes": row.get("notes"),
        "companyId": row.get("company_id"),
        "createdBy": row.get("created_by"),
        "createdAt": row.get("created_at"),
        "updatedAt": row.get("updated_at"),
    }


class BusinessDataService:
    def __init__(self, client: httpx.AsyncClient, *, company_id: str, use_fallback_data: bool = True):
        self.client = client
        self.company_id = company_id
        self.use_fallback_data = use_fallback_data

    async def aclose(self) -> None:
        await self.client.aclose()

    # --- Transport ---
    async def _api_call(
        self,
        endpoint: str,
        method: str = "GET",
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform one request and return the unwrapped ``data`` payload."""
        headers = {"Content-Type": "application/json", "x-company-id": self.company_id}
        try:
            response = await self.client.request(method, endpoint, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"API call {method} {endpoint} failed: {e}")
            raise BusinessDataError(f"API call failed: {e}", endpoint=endpoint) from e

        if response.is_error:
            detail = response.text or "No additional details"
            logger.error(f"API call {method} {endpoint} failed: {response.status_code} {response.reason_phrase}: {detail}")
            raise BusinessDataError(
                f"API call failed: {response.status_code} {response.reason_phrase}",
                endpoint=endpoint,
                status_code=response.status_code,
                detail=detail,
            )

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise BusinessDataError("API returned a non-JSON body", endpoint=endpoint, status_code=response.status_code) from e
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    async def _get_list(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        data = await self._api_call(endpoint, params=params)
        return data if isinstance(data, list) else []

    @staticmethod
    def _parse_list(model: Type[ModelT], rows: List[Dict[str, Any]]) -> List[ModelT]:
        return [model.model_validate(row) for row in rows]

    async def _get_one(self, model: Type[ModelT], endpoint: str) -> Optional[ModelT]:
        try:
            data = await self._api_call(endpoint)
        except BusinessDataError:
            return None
        if not data:
            return None
        return model.model_validate(data)

    async def _create(self, model: Type[ModelT], endpoint: str, data: Body) -> ModelT:
        result = await self._api_call(endpoint, "POST", json=_to_body(data))
        return model.model_validate(result)

    async def _update(self, model: Type[ModelT], endpoint: str, data: Body) -> ModelT:
        result = await self._api_call(endpoint, "PUT", json=_to_body(data))
        return model.model_validate(result)

    async def _delete(self, endpoint: str) -> bool:
        try:
            await self._api_call(endpoint, "DELETE")
            return True
        except BusinessDataError as e:
            logger.error(f"Failed to delete {endpoint}: {e}")
            return False

    def _fallback(self, what: str, error: BusinessDataError, factory):
        if not self.use_fallback_data:
            raise error
        logger.warning(f"Serving fallback {what}: {error}")
        return factory()

    # --- Customers ---
    async def get_customers(self) -> List[Customer]:
        try:
            rows = await self._get_list("/customers")
        except BusinessDataError as e:
            raise _failed("Failed to fetch customers", e) from e
        return [Customer.model_validate(_normalize_customer(row)) for row in rows]

    async def get_customer_by_id(self, customer_id: str) -> Optional[Customer]:
        try:
            data = await self._api_call(f"/customers/{customer_id}")
        except BusinessDataError:
            return None
        if not data:
            return None
        return Customer.model_validate(_normalize_customer(data))

    async def create_customer(self, data: Body) -> Customer:
        return await self._create(Customer, "/customers", data)

    async def update_customer(self, customer_id: str, data: Body) -> Customer:
        return await self._update(Customer, f"/customers/{customer_id}", data)

    async def delete_customer(self, customer_id: str) -> bool:
        return await self._delete(f"/customers/{customer_id}")

    # --- Products ---
    async def get_products(self) -> List[Product]:
        try:
            return self._parse_list(Product, await self._get_list("/products"))
        except BusinessDataError as e:
            return self._fallback("products", e, fallback_data.fallback_products)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return await self._get_one(Product, f"/products/{product_id}")

    async def create_product(self, data: Body) -> Product:
        return await self._create(Product, "/products", data)

    async def update_product(self, product_id: str, data: Body) -> Product:
        return await self._update(Product, f"/products/{product_id}", data)

    async def delete_product(self, product_id: str) -> bool:
        return await self._delete(f"/products/{product_id}")

    async def update_product_stock(self, product_id: str, quantity: float, movement_type: str, reference: Optional[str] = None) -> None:
        await self._api_call(
            f"/products/{product_id}/stock",
            "PUT",
            json={"quantity": quantity, "type": movement_type, "reference": reference},
        )

    async def get_low_stock_products(self) -> List[Product]:
        try:
            return self._parse_list(Product, await self._get_list("/products/low-stock"))
        except BusinessDataError:
            return []

    # --- Invoices ---
    async def get_invoices(self) -> List[Invoice]:
        try:
            rows = await self._get_list("/invoices")
        except BusinessDataError as e:
            raise _failed("Failed to fetch invoices", e) from e
        return self._parse_list(Invoice, rows)

    async def get_invoice_by_id(self, invoice_id: str) -> Optional[Invoice]:
        return await self._get_one(Invoice, f"/invoices/{invoice_id}")

    async def create_invoice(self, data: Body) -> Invoice:
        return await self._create(Invoice, "/invoices", data)

    async def update_invoice(self, invoice_id: str, data: Body) -> Invoice:
        return await self._update(Invoice, f"/invoices/{invoice_id}", data)

    async def delete_invoice(self, invoice_id: str) -> bool:
        return await self._delete(f"/invoices/{invoice_id}")

    # --- Quotations ---
    async def get_quotations(self) -> List[Quotation]:
        try:
            rows = await self._get_list("/quotations")
        except BusinessDataError as e:
            raise _failed("Failed to fetch quotations", e) from e
        return [Quotation.model_validate(_normalize_quotation_row(row)) for row in rows]

    async def get_quotation_by_id(self, quotation_id: str) -> Optional[Quotation]:
        return await self._get_one(Quotation, f"/quotations/{quotation_id}")

    async def create_quotation(self, data: Body) -> Quotation:
        return await self._create(Quotation, "/quotations", data)

    async def update_quotation(self, quotation_id: str, data: Body) -> Quotation:
        return await self._update(Quotation, f"/quotations/{quotation_id}", data)

    async def delete_quotation(self, quotation_id: str) -> bool:
        return await self._delete(f"/quotations/{quotation_id}")

    # --- Proforma invoices ---
    async def get_proformas(self) -> List[ProformaInvoice]:
        try:
            return self._parse_list(ProformaInvoice, await self._get_list("/proformas"))
        except BusinessDataError:
            return []

    async def get_proforma_invoices(self) -> List[ProformaInvoice]:
        return await self.get_proformas()

    async def get_proforma_invoice_by_id(self, proforma_id: str) -> Optional[ProformaInvoice]:
        return await self._get_one(ProformaInvoice, f"/proformas/{proforma_id}")

    async def create_proforma_invoice(self, data: Body) -> ProformaInvoice:
        return await self._create(ProformaInvoice, "/proformas", data)

    async def update_proforma_invoice(self, proforma_id: str, data: Body) -> ProformaInvoice:
        return await self._update(ProformaInvoice, f"/proformas/{proforma_id}", data)

    async def delete_proforma_invoice(self, proforma_id: str) -> bool:
        return await self._delete(f"/proformas/{proforma_id}")

    # --- Credit notes (no schema on our side yet; raw records) ---
    async def get_credit_notes(self) -> List[Dict[str, Any]]:
        try:
            return await self._get_list("/credit-notes")
        except BusinessDataError as e:
            raise _failed("Failed to fetch credit notes", e) from e

    async def get_credit_note(self, credit_note_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self._api_call(f"/credit-notes/{credit_note_id}")
        except BusinessDataError as e:
            raise _failed("Failed to fetch credit note", e) from e

    # --- Payments ---
    async def get_payments(self) -> List[Payment]:
        try:
            return self._parse_list(Payment, await self._get_list("/payments"))
        except BusinessDataError:
            return []

    async def create_payment(self, data: Body) -> Payment:
        return await self._create(Payment, "/payments", data)

    async def update_payment(self, payment_id: str, data: Body) -> Payment:
        return await self._update(Payment, f"/payments/{payment_id}", data)

    async def delete_payment(self, payment_id: str) -> bool:
        return await self._delete(f"/payments/{payment_id}")

    async def process_payment(
        self,
        invoice_id: str,
        amount: float,
        method: str,
        reference: str,
        notes: Optional[str] = None,
    ) -> Optional[Payment]:
        body = {"invoiceId": invoice_id, "amount": amount, "method": method, "reference": reference, "notes": notes}
        try:
            data = await self._api_call("/payments", "POST", json=body)
        except BusinessDataError as e:
            logger.error(f"Failed to process payment for invoice {invoice_id}: {e}")
            return None
        return Payment.model_validate(data) if data else None

    # --- Conversions ---
    async def _convert(self, model: Type[ModelT], endpoint: str) -> Optional[ModelT]:
        try:
            data = await self._api_call(endpoint, "POST")
        except BusinessDataError as e:
            logger.error(f"Conversion {endpoint} failed: {e}")
            return None
        return model.model_validate(data) if data else None

    async def convert_quotation_to_proforma(self, quotation_id: str) -> Optional[ProformaInvoice]:
        return await self._convert(ProformaInvoice, f"/quotations/{quotation_id}/convert/proforma")

    async def convert_quotation_to_invoice(self, quotation_id: str) -> Optional[Invoice]:
        return await self._convert(Invoice, f"/quotations/{quotation_id}/convert/invoice")

    async def convert_proforma_to_invoice(self, proforma_id: str) -> Optional[Invoice]:
        return await self._convert(Invoice, f"/proformas/{proforma_id}/convert/invoice")

    # --- Dashboard ---
    async def get_dashboard_metrics(self) -> DashboardMetrics:
        try:
            return DashboardMetrics.model_validate(await self._api_call("/dashboard/metrics"))
        except BusinessDataError as e:
            return self._fallback("dashboard metrics", e, fallback_data.fallback_dashboard_metrics)

    # --- Suppliers ---
    async def get_suppliers(self) -> List[Supplier]:
        try:
            return self._parse_list(Supplier, await self._get_list("/suppliers"))
        except BusinessDataError as e:
            return self._fallback("suppliers", e, fallback_data.fallback_suppliers)

    async def create_supplier(self, data: Body) -> Supplier:
        return await self._create(Supplier, "/suppliers", data)

    async def update_supplier(self, supplier_id: str, data: Body) -> Supplier:
        return await self._update(Supplier, f"/suppliers/{supplier_id}", data)

    async def delete_supplier(self, supplier_id: str) -> bool:
        return await self._delete(f"/suppliers/{supplier_id}")

    # --- Stock movements ---
    async def get_stock_movements(self) -> List[StockMovement]:
        try:
            return self._parse_list(StockMovement, await self._get_list("/stock-movements"))
        except BusinessDataError:
            return []

    # --- Activity log ---
    async def get_activity_log(self) -> List[ActivityLogEntry]:
        try:
            return self._parse_list(ActivityLogEntry, await self._get_list("/activity-log"))
        except BusinessDataError as e:
            return self._fallback("activity log", e, fallback_data.fallback_activity_log)

    async def add_activity_log(self, entry: Body) -> None:
        try:
            await self._api_call("/activity-log", "POST", json=_to_body(entry))
        except BusinessDataError as e:
            # Losing an activity entry never fails the caller
            logger.error(f"Failed to add activity log entry: {e}")

    # --- Statement of account ---
    async def get_statement_of_account(self, customer_id: str, filters: Optional[StatementFilter] = None) -> Any:
        params: Dict[str, Any] = {"customerId": customer_id}
        if filters is not None:
            if filters.start_date:
                params["startDate"] = filters.start_date.isoformat()
            if filters.end_date:
                params["endDate"] = filters.end_date.isoformat()
            params["status"] = filters.status.value
            params["aging"] = filters.aging.value
        try:
            return await self._api_call("/statement-of-account", params=params)
        except BusinessDataError as e:
            raise _failed("Failed to fetch statement of account", e) from e

    # --- Categories ---
    async def get_categories(self) -> List[ProductCategory]:
        try:
            rows = await self._get_list("/categories")
        except BusinessDataError as e:
            raise _failed("Failed to fetch categories", e) from e
        return self._parse_list(ProductCategory, rows)

    async def create_category(self, data: Body) -> ProductCategory:
        return await self._create(ProductCategory, "/categories", data)

    async def update_category(self, category_id: str, data: Body) -> ProductCategory:
        return await self._update(ProductCategory, f"/categories/{category_id}", data)

    async def delete_category(self, category_id: str) -> bool:
        return await self._delete(f"/categories/{category_id}")

    async def setup_categories(self) -> Any:
        return await self._api_call("/categories/setup", "POST")

    # --- Maintenance ---
    async def create_sample_data(self) -> Any:
        return await self._api_call("/seed/sample-data", "POST")

    async def test_connection(self) -> bool:
        try:
            await self._api_call("/ping")
            return True
        except BusinessDataError as e:
            logger.warning(f"Business API ping failed: {e}")
            return False
