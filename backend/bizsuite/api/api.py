from fastapi import APIRouter

# Import endpoint modules
from bizsuite.api.endpoints import templates
from bizsuite.api.endpoints import documents
from bizsuite.api.endpoints import statements
from bizsuite.api.endpoints import payments
from bizsuite.api.endpoints import conversions
from bizsuite.api.endpoints import company

api_router = APIRouter()

api_router.include_router(templates.router, prefix="/templates", tags=["Templates"])
api_router.include_router(documents.router, prefix="/documents", tags=["Documents"])
api_router.include_router(statements.router, prefix="/statements", tags=["Statements"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(conversions.router, tags=["Conversions"]) # /quotations/... and /proformas/...
api_router.include_router(company.router, prefix="/company-settings", tags=["Company Settings"])
