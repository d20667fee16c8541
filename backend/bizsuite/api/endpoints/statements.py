# backend/bizsuite/api/endpoints/statements.py
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from typing import Any, Optional

from bizsuite import schemas
from bizsuite.api import deps
from bizsuite.api.rendering import render_pdf_response
from bizsuite.core.errors import BusinessDataError
from bizsuite.services.business_data_service import BusinessDataService
from bizsuite.services.pdf_service import PDFService
from bizsuite.services.statement_service import build_statement

logger = logging.getLogger(__name__)

router = APIRouter()


def statement_filters(
    start_date: Optional[date] = Query(None, alias="startDate", description="Entries from this date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, alias="endDate", description="Entries up to this date (YYYY-MM-DD)"),
    status_filter: schemas.StatementStatusFilterEnum = Query(schemas.StatementStatusFilterEnum.ALL, alias="status"),
    aging: schemas.AgingBucketEnum = Query(schemas.AgingBucketEnum.ALL),
) -> schemas.StatementFilter:
    return schemas.StatementFilter(start_date=start_date, end_date=end_date, status=status_filter, aging=aging)


async def _load_statement(
    data_service: BusinessDataService, customer_id: str, filters: schemas.StatementFilter
) -> schemas.StatementOfAccount:
    customer = await data_service.get_customer_by_id(customer_id)
    if not customer:
        raise await deps.missing_record_error(data_service, "Customer not found")
    try:
        invoices = await data_service.get_invoices()
    except BusinessDataError as e:
        logger.error(f"Cannot build statement for customer {customer_id}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    payments = await data_service.get_payments()
    return build_statement(customer, invoices, payments, filters)


@router.get("/{customer_id}", response_model=schemas.StatementOfAccount)
async def read_statement_of_account(
    customer_id: str,
    *,
    filters: schemas.StatementFilter = Depends(statement_filters),
    data_service: BusinessDataService = Depends(deps.get_data_service)
) -> Any:
    """
    Statement of account for a customer: invoices and payments in date order
    with a running balance, totals and an aging summary.
    """
    return await _load_statement(data_service, customer_id, filters)


@router.get("/{customer_id}/pdf", response_class=Response)
async def download_statement_pdf(
    customer_id: str,
    *,
    filters: schemas.StatementFilter = Depends(statement_filters),
    template_id: Optional[str] = Query(None),
    download: bool = Query(True),
    data_service: BusinessDataService = Depends(deps.get_data_service),
    pdf_service: PDFService = Depends(deps.get_pdf_service)
) -> Response:
    """
    Download a customer's statement of account as a PDF.
    """
    statement = await _load_statement(data_service, customer_id, filters)
    return await render_pdf_response(
        pdf_service.generate_statement_pdf,
        statement,
        label=f"statement of customer {customer_id}",
        download=download,
        template_id=template_id,
    )
