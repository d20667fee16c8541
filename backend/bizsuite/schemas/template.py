from pydantic import Field, constr
from typing import Optional
from datetime import datetime
from enum import Enum

from bizsuite.schemas.base import CamelModel

# --- Enums for Templates ---
class DocumentTypeEnum(str, Enum):
    INVOICE = "invoice"
    QUOTATION = "quotation"
    PROFORMA = "proforma"
    RECEIPT = "receipt"
    PACKING_LIST = "packing_list"
    DELIVERY_NOTE = "delivery_note"
    PURCHASE_ORDER = "purchase_order"
    CREDIT_NOTE = "credit_note"
    DEBIT_NOTE = "debit_note"
    STATEMENT = "statement"
    GOODS_RECEIVED_NOTE = "goods_received_note"
    MATERIAL_TRANSFER_NOTE = "material_transfer_note"

class LayoutEnum(str, Enum):
    STANDARD = "standard"
    MODERN = "modern"
    MINIMAL = "minimal"
    CORPORATE = "corporate"

class LogoPositionEnum(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

class BorderStyleEnum(str, Enum):
    NONE = "none"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


# --- Design value objects ---
# Colour strings are not validated; a bad value only shows up when the document is drawn.
class TemplateColors(CamelModel):
    primary: str
    secondary: str
    accent: str
    text: str

class FontSizes(CamelModel):
    heading: float # pt
    body: float
    small: float

class TemplateFonts(CamelModel):
    heading: str = "helvetica"
    body: str = "helvetica"
    size: FontSizes

class TemplateSpacing(CamelModel):
    margins: float # mm
    line_height: float
    section_gap: float # mm

class TemplateHeader(CamelModel):
    show_logo: bool = True
    logo_position: LogoPositionEnum = LogoPositionEnum.LEFT
    show_company_info: bool = True
    background_color: Optional[str] = None

class TemplateFooter(CamelModel):
    show_terms: bool = True
    show_signature: bool = True
    show_page_numbers: bool = False
    custom_text: Optional[str] = None

class TemplateTable(CamelModel):
    header_background_color: str
    alternate_row_color: Optional[str] = None
    border_style: BorderStyleEnum = BorderStyleEnum.LIGHT

class TemplateDesign(CamelModel):
    layout: LayoutEnum = LayoutEnum.STANDARD
    colors: TemplateColors
    fonts: TemplateFonts
    spacing: TemplateSpacing
    header: TemplateHeader
    footer: TemplateFooter
    table: TemplateTable


# --- Template Schemas ---
class DocumentTemplate(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    type: DocumentTypeEnum
    is_active: bool = False
    is_default: bool = False # Seeded built-ins only; these cannot be deleted
    design: TemplateDesign
    company_id: str = "1"
    created_by: str = "1"
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

# Properties to receive on template creation
class DocumentTemplateCreate(CamelModel):
    name: constr(min_length=1, max_length=255)
    description: Optional[str] = None
    type: DocumentTypeEnum
    design: TemplateDesign

# Properties to receive on template update (all fields optional)
class DocumentTemplateUpdate(CamelModel):
    name: Optional[constr(min_length=1, max_length=255)] = None
    description: Optional[str] = None
    design: Optional[TemplateDesign] = None

class TemplateDuplicate(CamelModel):
    name: Optional[constr(min_length=1, max_length=255)] = None # Defaults to "<name> (Copy)"

class ActiveTemplateUpdate(CamelModel):
    template_id: str
