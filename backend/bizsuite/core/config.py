from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from pathlib import Path


class Settings(BaseSettings):
    PROJECT_NAME: str = "Business Suite API"
    PROJECT_VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Upstream business REST API (customers, products, invoices, ...)
    BUSINESS_API_BASE_URL: str = "http://localhost:8080/api"
    BUSINESS_API_TIMEOUT: Optional[float] = 30.0 # Seconds; None waits forever
    COMPANY_ID: str = "00000000-0000-0000-0000-000000000001" # Sent as x-company-id

    # When the upstream API is down, serve canned products/suppliers/dashboard/activity data
    USE_FALLBACK_DATA: bool = True

    # --- Documents ---
    # Only invoice, quotation and receipt defaults are seeded unless this is on
    SEED_ALL_DOCUMENT_TEMPLATES: bool = False
    CURRENCY_CODE: str = "KES"

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",  # Vite dev server
        "http://localhost:3000",
    ]

    model_config = SettingsConfigDict(
        # Project root holds the .env (backend/bizsuite/core -> root)
        env_file=Path(__file__).resolve().parent.parent.parent.parent / ".env",
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True
    )

settings = Settings()
