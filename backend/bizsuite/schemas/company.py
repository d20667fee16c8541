from typing import List, Optional

from bizsuite.schemas.base import CamelModel


class CompanyAddress(CamelModel):
    line1: str
    line2: Optional[str] = None
    city: str
    country: str
    postal_code: str


class CompanyContact(CamelModel):
    phone: List[str] = []
    email: str
    website: Optional[str] = None


class CompanyTax(CamelModel):
    kra_pin: str
    vat_number: Optional[str] = None
    paybill_number: Optional[str] = None
    account_number: Optional[str] = None


class CompanyBranding(CamelModel):
    logo: Optional[str] = None # URL or data: URI
    primary_color: str = "#2563eb"
    secondary_color: str = "#10b981"


class InvoiceSettings(CamelModel):
    prefix: str = "INV"
    starting_number: int = 1
    terms: Optional[List[str]] = None
    footer: Optional[str] = None # Printed as the tagline under the company name
    show_vat: bool = True
    default_vat_rate: float = 16


class CompanySettings(CamelModel):
    id: str
    name: str
    address: CompanyAddress
    contact: CompanyContact
    tax: CompanyTax
    branding: CompanyBranding
    invoice_settings: InvoiceSettings
