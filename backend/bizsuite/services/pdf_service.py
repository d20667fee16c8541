# backend/bizsuite/services/pdf_service.py
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from bizsuite.core.company import get_default_company_settings
from bizsuite.schemas.company import CompanySettings
from bizsuite.schemas.invoice import Invoice, ProformaInvoice, Quotation
from bizsuite.schemas.payment import Payment
from bizsuite.schemas.statement import StatementOfAccount
from bizsuite.schemas.template import DocumentTemplate, DocumentTypeEnum
from bizsuite.services.document_layout import DocumentLayout, DocumentLayoutBuilder

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def html_to_pdf(html: str, base_url: Optional[str] = None) -> bytes:
    """Render HTML to PDF bytes with WeasyPrint."""
    # Imported here so the API and layout code run on hosts without pango/cairo
    from weasyprint import HTML  # type: ignore

    return HTML(string=html, base_url=base_url or str(TEMPLATE_DIR)).write_pdf()


class GeneratedDocument(BaseModel):
    filename: str
    content: bytes
    media_type: str = "application/pdf"
    download: bool = True
    template_id: Optional[str] = None

    @property
    def content_disposition(self) -> str:
        disposition = "attachment" if self.download else "inline"
        return f'{disposition}; filename="{self.filename}"'


class PDFService:
    """
    Renders business records into PDF documents.

    Keeps its own view of the registered templates (by id, plus the active
    one per type) which the TemplateManager feeds through register_template.
    Template resolution: explicit id, then the active template for the
    document type, then the built-in default design.
    """

    def __init__(self, company_settings: Optional[CompanySettings] = None, currency_code: str = "KES"):
        self.company_settings = company_settings or get_default_company_settings()
        self.currency_code = currency_code
        self._templates: Dict[str, DocumentTemplate] = {}
        self._active_templates: Dict[DocumentTypeEnum, str] = {}
        self._lock = threading.RLock()
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(['html', 'xml'])
        )

    # --- Company settings ---
    def update_company_settings(self, company_settings: CompanySettings) -> None:
        self.company_settings = company_settings
        logger.info(f"Company settings updated for '{company_settings.name}'")

    def get_company_settings(self) -> CompanySettings:
        return self.company_settings

    # --- Template registration ---
    def register_template(self, template: DocumentTemplate) -> None:
        with self._lock:
            previous = self._templates.get(template.id)
            if previous is not None and previous.type != template.type:
                if self._active_templates.get(previous.type) == template.id:
                    del self._active_templates[previous.type]
            self._templates[template.id] = template
            if template.is_active:
                self._active_templates[template.type] = template.id

    def unregister_template(self, template_id: str) -> None:
        with self._lock:
            template = self._templates.pop(template_id, None)
            if template is not None and self._active_templates.get(template.type) == template_id:
                del self._active_templates[template.type]

    def clear_active_template(self, doc_type: DocumentTypeEnum) -> None:
        with self._lock:
            self._active_templates.pop(doc_type, None)

    def resolve_template(self, doc_type: DocumentTypeEnum, template_id: Optional[str] = None) -> Optional[DocumentTemplate]:
        """None means the built-in default design applies."""
        with self._lock:
            if template_id:
                template = self._templates.get(template_id)
                if template is not None:
                    return template
                logger.warning(f"Template '{template_id}' is not registered; falling back to the active {doc_type.value} template")
            active_id = self._active_templates.get(doc_type)
            return self._templates.get(active_id) if active_id else None

    # --- Layout and rendering ---
    def _builder(self) -> DocumentLayoutBuilder:
        return DocumentLayoutBuilder(self.company_settings, self.currency_code)

    def build_invoice_layout(self, invoice: Invoice, template_id: Optional[str] = None) -> DocumentLayout:
        return self._builder().build_invoice(invoice, self.resolve_template(DocumentTypeEnum.INVOICE, template_id))

    def build_quotation_layout(self, quotation: Quotation, template_id: Optional[str] = None) -> DocumentLayout:
        return self._builder().build_quotation(quotation, self.resolve_template(DocumentTypeEnum.QUOTATION, template_id))

    def build_proforma_layout(self, proforma: ProformaInvoice, template_id: Optional[str] = None) -> DocumentLayout:
        return self._builder().build_proforma(proforma, self.resolve_template(DocumentTypeEnum.PROFORMA, template_id))

    def build_payment_receipt_layout(self, payment: Payment, template_id: Optional[str] = None) -> DocumentLayout:
        return self._builder().build_payment_receipt(payment, self.resolve_template(DocumentTypeEnum.RECEIPT, template_id))

    def build_statement_layout(self, statement: StatementOfAccount, template_id: Optional[str] = None) -> DocumentLayout:
        return self._builder().build_statement(statement, self.resolve_template(DocumentTypeEnum.STATEMENT, template_id))

    def render_html(self, layout: DocumentLayout) -> str:
        template = self.jinja_env.get_template("documents/document.html")
        return template.render(layout=layout, style=layout.style)

    def _generate(self, layout: DocumentLayout, download: bool) -> GeneratedDocument:
        html = self.render_html(layout)
        pdf_bytes = html_to_pdf(html)
        logger.info(f"Generated {layout.document_type.value} document {layout.filename} ({len(pdf_bytes)} bytes)")
        return GeneratedDocument(
            filename=layout.filename,
            content=pdf_bytes,
            download=download,
            template_id=layout.template_id,
        )

    # --- One operation per document kind ---
    def generate_invoice_pdf(self, invoice: Invoice, download: bool = True, template_id: Optional[str] = None) -> GeneratedDocument:
        return self._generate(self.build_invoice_layout(invoice, template_id), download)

    def generate_quotation_pdf(self, quotation: Quotation, download: bool = True, template_id: Optional[str] = None) -> GeneratedDocument:
        return self._generate(self.build_quotation_layout(quotation, template_id), download)

    def generate_proforma_pdf(self, proforma: ProformaInvoice, download: bool = True, template_id: Optional[str] = None) -> GeneratedDocument:
        return self._generate(self.build_proforma_layout(proforma, template_id), download)

    def generate_payment_receipt_pdf(self, payment: Payment, download: bool = True, template_id: Optional[str] = None) -> GeneratedDocument:
        return self._generate(self.build_payment_receipt_layout(payment, template_id), download)

    def generate_statement_pdf(self, statement: StatementOfAccount, download: bool = True, template_id: Optional[str] = None) -> GeneratedDocument:
        return self._generate(self.build_statement_layout(statement, template_id), download)
