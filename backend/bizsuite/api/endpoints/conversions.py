# backend/bizsuite/api/endpoints/conversions.py
import logging
from enum import Enum
from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any, List, Union

from bizsuite import schemas
from bizsuite.api import deps
from bizsuite.services import conversion_service
from bizsuite.services.business_data_service import BusinessDataService

logger = logging.getLogger(__name__)

router = APIRouter()


class QuotationTargetEnum(str, Enum):
    PROFORMA = "proforma"
    INVOICE = "invoice"


async def _get_quotation(data_service: BusinessDataService, quotation_id: str) -> schemas.Quotation:
    quotation = await data_service.get_quotation_by_id(quotation_id)
    if not quotation:
        raise await deps.missing_record_error(data_service, "Quotation not found")
    return quotation


async def _get_convertible_quotation(data_service: BusinessDataService, quotation_id: str) -> schemas.Quotation:
    quotation = await _get_quotation(data_service, quotation_id)
    if not conversion_service.can_convert_quotation(quotation):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only accepted quotations that are still valid and have line items can be converted.",
        )
    return quotation


async def _get_convertible_proforma(data_service: BusinessDataService, proforma_id: str) -> schemas.ProformaInvoice:
    proforma = await data_service.get_proforma_invoice_by_id(proforma_id)
    if not proforma:
        raise await deps.missing_record_error(data_service, "Proforma invoice not found")
    if not conversion_service.can_convert_proforma(proforma):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only sent proforma invoices that are still valid and have line items can be converted.",
        )
    return proforma


@router.get("/quotations/{quotation_id}/conversion-options", response_model=List[conversion_service.ConversionOption])
async def read_quotation_conversion_options(
    quotation_id: str,
    *,
    data_service: BusinessDataService = Depends(deps.get_data_service)
) -> Any:
    """
    What a quotation can be converted into right now. Empty when it can't be converted.
    """
    quotation = await _get_quotation(data_service, quotation_id)
    return conversion_service.get_conversion_options(quotation)


@router.get(
    "/quotations/{quotation_id}/convert/{target}/preview",
    response_model=Union[schemas.ProformaInvoice, schemas.Invoice],
)
async def preview_quotation_conversion(
    quotation_id: str,
    target: QuotationTargetEnum,
    *,
    data_service: BusinessDataService = Depends(deps.get_data_service)
) -> Any:
    """
    The draft a conversion would produce, without saving anything.
    """
    quotation = await _get_convertible_quotation(data_service, quotation_id)
    if target == QuotationTargetEnum.PROFORMA:
        return conversion_service.convert_quotation_to_proforma(quotation)
    return conversion_service.convert_quotation_to_invoice(quotation)


@router.post(
    "/quotations/{quotation_id}/convert/{target}",
    response_model=Union[schemas.ProformaInvoice, schemas.Invoice],
    status_code=status.HTTP_201_CREATED,
)
async def convert_quotation(
    quotation_id: str,
    target: QuotationTargetEnum,
    *,
    data_service: BusinessDataService = Depends(deps.get_data_service)
) -> Any:
    """
    Convert an accepted quotation into a proforma invoice or an invoice.
    """
    quotation = await _get_convertible_quotation(data_service, quotation_id)
    if target == QuotationTargetEnum.PROFORMA:
        converted = await data_service.convert_quotation_to_proforma(quotation_id)
    else:
        converted = await data_service.convert_quotation_to_invoice(quotation_id)
    if not converted:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"The business API did not convert quotation {quotation.quote_number}.")

    await data_service.add_activity_log({
        "type": "conversion",
        "description": f"Quotation {quotation.quote_number} converted to {target.value}",
        "referenceId": converted.id,
    })
    logger.info(f"Converted quotation {quotation.quote_number} to {target.value}")
    return converted


@router.get("/proformas/{proforma_id}/convert/invoice/preview", response_model=schemas.Invoice)
async def preview_proforma_conversion(
    proforma_id: str,
    *,
    data_service: BusinessDataService = Depends(deps.get_data_service)
) -> Any:
    """
    The invoice draft a proforma conversion would produce, without saving anything.
    """
    proforma = await _get_convertible_proforma(data_service, proforma_id)
    return conversion_service.convert_proforma_to_invoice(proforma)


@router.post("/proformas/{proforma_id}/convert/invoice", response_model=schemas.Invoice, status_code=status.HTTP_201_CREATED)
async def convert_proforma(
    proforma_id: str,
    *,
    data_service: BusinessDataService = Depends(deps.get_data_service)
) -> Any:
    """
    Convert a sent proforma invoice into an invoice.
    """
    proforma = await _get_convertible_proforma(data_service, proforma_id)
    invoice = await data_service.convert_proforma_to_invoice(proforma_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"The business API did not convert proforma {proforma.proforma_number}.")

    await data_service.add_activity_log({
        "type": "conversion",
        "description": f"Proforma {proforma.proforma_number} converted to invoice {invoice.invoice_number}",
        "referenceId": invoice.id,
    })
    logger.info(f"Converted proforma {proforma.proforma_number} to invoice {invoice.invoice_number}")
    return invoice
