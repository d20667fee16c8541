import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizsuite.api.api import api_router
from bizsuite.core.company import get_default_company_settings
from bizsuite.core.config import Settings, settings
from bizsuite.services.business_data_service import BusinessDataService
from bizsuite.services.data_service_factory import create_data_service
from bizsuite.services.pdf_service import PDFService
from bizsuite.services.template_manager import TemplateManager

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings, data_service: Optional[BusinessDataService] = None) -> FastAPI:
    """
    Build the application and its services.
    The document generator, template registry and data service live on
    app.state, one instance each, and reach endpoints through api.deps.
    """
    logging.basicConfig(
        level=app_settings.LOG_LEVEL.upper(),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    pdf_service = PDFService(get_default_company_settings(), currency_code=app_settings.CURRENCY_CODE)
    template_manager = TemplateManager(
        pdf_service,
        include_extended_defaults=app_settings.SEED_ALL_DOCUMENT_TEMPLATES,
    )
    if data_service is None:
        data_service = create_data_service(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.data_service.aclose()
        logger.info("Business data service closed")

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        openapi_url=f"{app_settings.API_V1_STR}/openapi.json",
        version=app_settings.PROJECT_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.pdf_service = pdf_service
    app.state.template_manager = template_manager
    app.state.data_service = data_service

    # --- CORS ---
    # Frontend dev servers; add the deployed frontend origin through CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=app_settings.API_V1_STR)

    @app.get("/")
    async def read_root():
        return {"message": f"Welcome to {app_settings.PROJECT_NAME}!"}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.
        """
        return {"status": "ok", "message": f"{app_settings.PROJECT_NAME} is healthy!"}

    return app


app = create_app()
