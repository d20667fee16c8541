# backend/bizsuite/api/endpoints/company.py
from fastapi import APIRouter, Depends
from typing import Any

from bizsuite import schemas
from bizsuite.api import deps
from bizsuite.services.pdf_service import PDFService

router = APIRouter()


@router.get("/", response_model=schemas.CompanySettings)
async def read_company_settings(
    *,
    pdf_service: PDFService = Depends(deps.get_pdf_service)
) -> Any:
    """
    Company details printed on every document.
    """
    return pdf_service.get_company_settings()


@router.put("/", response_model=schemas.CompanySettings)
async def update_company_settings(
    *,
    settings_in: schemas.CompanySettings,
    pdf_service: PDFService = Depends(deps.get_pdf_service)
) -> Any:
    """
    Replace the company details. Kept in memory only; a restart restores the defaults.
    """
    pdf_service.update_company_settings(settings_in)
    return pdf_service.get_company_settings()
