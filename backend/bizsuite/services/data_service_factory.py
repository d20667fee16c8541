# backend/bizsuite/services/data_service_factory.py
import logging
from typing import Optional

import httpx

from bizsuite.core.config import Settings
from bizsuite.services.business_data_service import BusinessDataService

logger = logging.getLogger(__name__)


def create_data_service(app_settings: Settings, client: Optional[httpx.AsyncClient] = None) -> BusinessDataService:
    """
    Build the one BusinessDataService the application shares.
    Pass ``client`` to run against a mock transport.
    """
    if client is None:
        client = httpx.AsyncClient(
            base_url=app_settings.BUSINESS_API_BASE_URL,
            timeout=app_settings.BUSINESS_API_TIMEOUT,
        )
    logger.info(f"Business data service using live API at {app_settings.BUSINESS_API_BASE_URL}")
    return BusinessDataService(
        client,
        company_id=app_settings.COMPANY_ID,
        use_fallback_data=app_settings.USE_FALLBACK_DATA,
    )
