# Default company profile used on every generated document until changed via /company-settings
from bizsuite.schemas.company import (
    CompanyAddress,
    CompanyBranding,
    CompanyContact,
    CompanySettings,
    CompanyTax,
    InvoiceSettings,
)

default_company_settings = CompanySettings(
    id="1",
    name="Medplus Africa Limited",
    address=CompanyAddress(
        line1="P.O BOX 45352 - 00100, NAIROBI, KENYA",
        line2="Siens Plaza 4th floor room 1 opposite kcb bank River road",
        city="Nairobi",
        country="Kenya",
        postal_code="00100",
    ),
    contact=CompanyContact(
        phone=["+254 713416022", "+254 786830610"],
        email="sales@medplusafrica.com",
        website="www.medplusafrica.com",
    ),
    tax=CompanyTax(
        kra_pin="P052045925Z",
        paybill_number="303030",
        account_number="2047138798",
    ),
    branding=CompanyBranding(
        logo="https://cdn.builder.io/api/v1/image/assets%2F36ce27fc004b41f8b60187584af31eda%2F3cee787ea7404d498214c3c0a3fb9674?format=webp&width=800",
        primary_color="#2563eb",
        secondary_color="#10b981",
    ),
    invoice_settings=InvoiceSettings(
        prefix="INV",
        starting_number=901,
        terms=[
            "The company shall have general as well as particular lien on all goods for any unpaid A/C",
            "Cash transactions of any kind are not acceptable. All payments should be made by cheque, MPESA, or Bank transfer only",
            "Claims and queries must be lodged with us within 21 days of dispatch of goods, otherwise they will not be accepted back",
            "Where applicable, transport will be invoiced separately",
            "The company will not be responsible for any loss or damage of goods on transit collected by the customer or sent via customer's courier A/C",
            "The VAT is inclusive where applicable",
        ],
        footer="Your Medical & Laboratory Supplies Partner",
        show_vat=True,
        default_vat_rate=16,
    ),
)


def get_default_company_settings() -> CompanySettings:
    """Fresh copy so runtime edits never leak into the module default."""
    return default_company_settings.model_copy(deep=True)
