# backend/bizsuite/api/endpoints/documents.py
import logging
from enum import Enum
from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from fastapi.responses import HTMLResponse
from typing import Any, Optional

from bizsuite.api import deps
from bizsuite.api.rendering import render_pdf_response
from bizsuite.services.business_data_service import BusinessDataService
from bizsuite.services.pdf_service import PDFService

logger = logging.getLogger(__name__)

router = APIRouter()


class DocumentKindEnum(str, Enum):
    INVOICES = "invoices"
    QUOTATIONS = "quotations"
    PROFORMAS = "proformas"
    PAYMENTS = "payments"


# kind -> (PDFService layout builder, PDFService generator, label)
_RENDERERS = {
    DocumentKindEnum.INVOICES: ("build_invoice_layout", "generate_invoice_pdf", "invoice"),
    DocumentKindEnum.QUOTATIONS: ("build_quotation_layout", "generate_quotation_pdf", "quotation"),
    DocumentKindEnum.PROFORMAS: ("build_proforma_layout", "generate_proforma_pdf", "proforma invoice"),
    DocumentKindEnum.PAYMENTS: ("build_payment_receipt_layout", "generate_payment_receipt_pdf", "payment receipt"),
}


async def _load_record(data_service: BusinessDataService, kind: DocumentKindEnum, record_id: str) -> Any:
    if kind == DocumentKindEnum.INVOICES:
        record = await data_service.get_invoice_by_id(record_id)
    elif kind == DocumentKindEnum.QUOTATIONS:
        record = await data_service.get_quotation_by_id(record_id)
    elif kind == DocumentKindEnum.PROFORMAS:
        record = await data_service.get_proforma_invoice_by_id(record_id)
    else:
        # The upstream API has no payment-by-id endpoint
        payments = await data_service.get_payments()
        record = next((p for p in payments if p.id == record_id), None)

    if record is None:
        raise await deps.missing_record_error(
            data_service, f"{_RENDERERS[kind][2].capitalize()} '{record_id}' not found"
        )
    return record


@router.get("/{kind}/{record_id}/pdf", response_class=Response)
async def download_document_pdf(
    kind: DocumentKindEnum,
    record_id: str,
    *,
    template_id: Optional[str] = Query(None, description="Render with this template instead of the active one"),
    download: bool = Query(True, description="attachment (true) or inline (false) disposition"),
    data_service: BusinessDataService = Depends(deps.get_data_service),
    pdf_service: PDFService = Depends(deps.get_pdf_service)
) -> Response:
    """
    Render an invoice, quotation, proforma invoice or payment receipt as a PDF,
    using the requested template, else the active template for the document type,
    else the built-in default design.
    """
    record = await _load_record(data_service, kind, record_id)
    _, generator_name, label = _RENDERERS[kind]
    return await render_pdf_response(
        getattr(pdf_service, generator_name),
        record,
        label=f"{label} {record_id}",
        download=download,
        template_id=template_id,
    )


@router.get("/{kind}/{record_id}/preview", response_class=HTMLResponse)
async def preview_document_html(
    kind: DocumentKindEnum,
    record_id: str,
    *,
    template_id: Optional[str] = Query(None),
    data_service: BusinessDataService = Depends(deps.get_data_service),
    pdf_service: PDFService = Depends(deps.get_pdf_service)
) -> Any:
    """
    The HTML the PDF would be printed from, for in-browser previews.
    """
    record = await _load_record(data_service, kind, record_id)
    builder_name, _, label = _RENDERERS[kind]
    try:
        layout = getattr(pdf_service, builder_name)(record, template_id)
        html_content = pdf_service.render_html(layout)
    except Exception as e:
        logger.exception(f"Error rendering preview for {label} {record_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error rendering preview for {label} {record_id}.",
        )
    return HTMLResponse(content=html_content)
