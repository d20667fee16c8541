from fastapi import HTTPException, Request, status

from bizsuite.services.business_data_service import BusinessDataService
from bizsuite.services.pdf_service import PDFService
from bizsuite.services.template_manager import TemplateManager

# The composition root (main.create_app) puts one instance of each service on
# app.state; tests swap them through app.dependency_overrides.


def get_template_manager(request: Request) -> TemplateManager:
    return request.app.state.template_manager


def get_pdf_service(request: Request) -> PDFService:
    return request.app.state.pdf_service


def get_data_service(request: Request) -> BusinessDataService:
    """
    Dependency returning the shared upstream data service.
    """
    return request.app.state.data_service


async def missing_record_error(data_service: BusinessDataService, detail: str) -> HTTPException:
    """
    By-id lookups answer None both for a missing record and for a failed call.
    A failed connectivity check turns the 404 into a 502.
    """
    if not await data_service.test_connection():
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="The business API is unavailable.",
        )
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
