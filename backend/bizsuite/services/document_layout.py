# backend/bizsuite/services/document_layout.py
"""
Layout model for generated documents.

A record is turned into a DocumentLayout: resolved styles plus an ordered list
of sections. Sections carry display-ready strings only; the Jinja templates
under templates/documents render them top to bottom, each section starting
where the previous one ended, and the PDF engine paginates the flow.
"""
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from bizsuite.schemas.company import CompanySettings
from bizsuite.schemas.invoice import Invoice, InvoiceItem, ProformaInvoice, Quotation
from bizsuite.schemas.payment import Payment
from bizsuite.schemas.statement import StatementOfAccount
from bizsuite.schemas.template import (
    BorderStyleEnum,
    DocumentTemplate,
    DocumentTypeEnum,
    TemplateDesign,
)
from bizsuite.services.financials import calculate_additional_tax_amount
from bizsuite.utils.helpers import (
    contrasting_text_color,
    css_value,
    format_currency,
    format_date,
    format_quantity,
    format_rate,
    safe_filename,
    split_address,
)

# Used when no template resolves: black title, grey table header, terms and signatures shown
DEFAULT_DESIGN = TemplateDesign.model_validate({
    "layout": "standard",
    "colors": {"primary": "#000000", "secondary": "#4b5563", "accent": "#2563eb", "text": "#111827"},
    "fonts": {"heading": "helvetica", "body": "helvetica", "size": {"heading": 16, "body": 10, "small": 8}},
    "spacing": {"margins": 20, "line_height": 1.4, "section_gap": 8},
    "header": {"show_logo": True, "logo_position": "left", "show_company_info": True},
    "footer": {"show_terms": True, "show_signature": True, "show_page_numbers": False},
    "table": {"header_background_color": "#f0f0f0", "border_style": "light"},
})

FONT_STACKS = {
    "helvetica": "Helvetica, Arial, 'Liberation Sans', sans-serif",
    "times": "'Times New Roman', Times, 'Liberation Serif', serif",
    "courier": "'Courier New', Courier, 'Liberation Mono', monospace",
}

BORDER_WIDTHS_PT = {
    BorderStyleEnum.NONE: 0,
    BorderStyleEnum.LIGHT: 0.5,
    BorderStyleEnum.MEDIUM: 1,
    BorderStyleEnum.HEAVY: 2,
}


# --- Sections ---
class LabelValue(BaseModel):
    label: str
    value: str

class HeaderSection(BaseModel):
    kind: Literal["header"] = "header"
    company_name: str
    tagline: Optional[str] = None
    tax_pin: Optional[str] = None
    show_logo: bool = True
    logo_url: Optional[str] = None
    logo_initial: str = ""

class CompanyInfoSection(BaseModel):
    kind: Literal["company_info"] = "company_info"
    lines: List[str] = []

class TitleSection(BaseModel):
    kind: Literal["title"] = "title"
    text: str

class PartySection(BaseModel):
    kind: Literal["party"] = "party"
    label: str = "To:"
    name: str
    address_lines: List[str] = []
    meta: List[LabelValue] = []

class TableColumn(BaseModel):
    label: str
    align: Literal["left", "center", "right"] = "left"

class TableSection(BaseModel):
    kind: Literal["table"] = "table"
    columns: List[TableColumn]
    rows: List[List[str]] = []

class TotalsSection(BaseModel):
    kind: Literal["totals"] = "totals"
    rows: List[LabelValue] = []
    grand_total: LabelValue

class DetailsSection(BaseModel):
    kind: Literal["details"] = "details"
    heading: Optional[str] = None
    rows: List[LabelValue] = []

class TermsSection(BaseModel):
    kind: Literal["terms"] = "terms"
    heading: str = "Terms and regulations"
    lines: List[str] = []

class SignatureSection(BaseModel):
    kind: Literal["signature"] = "signature"
    labels: List[str] = ["Prepared By:", "Checked By:"]

class FooterSection(BaseModel):
    kind: Literal["footer"] = "footer"
    custom_text: Optional[str] = None

Section = Annotated[
    Union[
        HeaderSection, CompanyInfoSection, TitleSection, PartySection, TableSection,
        TotalsSection, DetailsSection, TermsSection, SignatureSection, FooterSection,
    ],
    Field(discriminator="kind"),
]


class DocumentStyle(BaseModel):
    """Design values resolved to what the stylesheet needs."""
    layout: str
    page_margin_mm: float
    line_height: float
    section_gap_mm: float
    heading_font: str
    body_font: str
    heading_size_pt: float
    body_size_pt: float
    small_size_pt: float
    primary_color: str
    secondary_color: str
    accent_color: str
    text_color: str
    header_background: Optional[str] = None
    logo_position: str = "left"
    table_header_background: str
    table_header_text: str
    alternate_row_color: Optional[str] = None
    border_width_pt: float
    show_page_numbers: bool = False


class DocumentLayout(BaseModel):
    document_type: DocumentTypeEnum
    title: str
    filename: str
    template_id: Optional[str] = None
    style: DocumentStyle
    sections: List[Section]

    @property
    def section_kinds(self) -> List[str]:
        return [section.kind for section in self.sections]

    def get_section(self, kind: str) -> Optional[BaseModel]:
        for section in self.sections:
            if section.kind == kind:
                return section
        return None


def resolve_style(design: TemplateDesign) -> DocumentStyle:
    table_header = css_value(design.table.header_background_color)
    return DocumentStyle(
        layout=design.layout.value,
        page_margin_mm=design.spacing.margins,
        line_height=design.spacing.line_height,
        section_gap_mm=design.spacing.section_gap,
        heading_font=FONT_STACKS.get(design.fonts.heading.lower(), css_value(design.fonts.heading)),
        body_font=FONT_STACKS.get(design.fonts.body.lower(), css_value(design.fonts.body)),
        heading_size_pt=design.fonts.size.heading,
        body_size_pt=design.fonts.size.body,
        small_size_pt=design.fonts.size.small,
        primary_color=css_value(design.colors.primary),
        secondary_color=css_value(design.colors.secondary),
        accent_color=css_value(design.colors.accent),
        text_color=css_value(design.colors.text),
        header_background=css_value(design.header.background_color),
        logo_position=design.header.logo_position.value,
        table_header_background=table_header,
        table_header_text=contrasting_text_color(table_header),
        alternate_row_color=css_value(design.table.alternate_row_color),
        border_width_pt=BORDER_WIDTHS_PT[design.table.border_style],
        show_page_numbers=design.footer.show_page_numbers,
    )


class DocumentLayoutBuilder:
    def __init__(self, company: CompanySettings, currency_code: str = "KES"):
        self.company = company
        self.currency_code = currency_code

    # --- Documents ---
    def build_invoice(self, invoice: Invoice, template: Optional[DocumentTemplate] = None) -> DocumentLayout:
        meta = [
            LabelValue(label="Date", value=format_date(invoice.issue_date)),
            LabelValue(label="Due Date", value=format_date(invoice.due_date)),
            LabelValue(label="LPO NO.", value=invoice.lpo_number or "N/A"),
        ]
        return self._sales_document(
            DocumentTypeEnum.INVOICE, f"INVOICE NO. {invoice.invoice_number}", invoice.invoice_number,
            invoice, meta, template,
        )

    def build_quotation(self, quotation: Quotation, template: Optional[DocumentTemplate] = None) -> DocumentLayout:
        meta = [
            LabelValue(label="Date", value=format_date(quotation.issue_date)),
            LabelValue(label="Valid Until", value=format_date(quotation.valid_until)),
        ]
        return self._sales_document(
            DocumentTypeEnum.QUOTATION, f"QUOTATION NO. {quotation.quote_number}", quotation.quote_number,
            quotation, meta, template,
        )

    def build_proforma(self, proforma: ProformaInvoice, template: Optional[DocumentTemplate] = None) -> DocumentLayout:
        meta = [
            LabelValue(label="Date", value=format_date(proforma.issue_date)),
            LabelValue(label="Valid Until", value=format_date(proforma.valid_until)),
        ]
        return self._sales_document(
            DocumentTypeEnum.PROFORMA, f"PROFORMA INVOICE NO. {proforma.proforma_number}", proforma.proforma_number,
            proforma, meta, template,
        )

    def build_payment_receipt(self, payment: Payment, template: Optional[DocumentTemplate] = None) -> DocumentLayout:
        design = template.design if template else DEFAULT_DESIGN
        rows = [
            LabelValue(label="Payment Reference", value=payment.reference),
            LabelValue(label=f"Amount ({self.currency_code})", value=format_currency(payment.amount)),
            LabelValue(label="Payment Method", value=payment.method.value.upper()),
            LabelValue(label="Date", value=format_date(payment.created_at)),
        ]
        if payment.invoice_id:
            rows.append(LabelValue(label="Invoice", value=payment.invoice_id))
        if payment.notes:
            rows.append(LabelValue(label="Notes", value=payment.notes))

        sections: list = self._opening_sections(design, "PAYMENT RECEIPT")
        sections.append(DetailsSection(heading="Payment Details", rows=rows))
        sections.extend(self._closing_sections(design))
        return DocumentLayout(
            document_type=DocumentTypeEnum.RECEIPT,
            title="PAYMENT RECEIPT",
            filename=f"Receipt-{safe_filename(payment.reference)}.pdf",
            template_id=template.id if template else None,
            style=resolve_style(design),
            sections=sections,
        )

    def build_statement(self, statement: StatementOfAccount, template: Optional[DocumentTemplate] = None) -> DocumentLayout:
        design = template.design if template else DEFAULT_DESIGN
        currency = self.currency_code
        filters = statement.filters
        if filters.start_date or filters.end_date:
            period = f"{format_date(filters.start_date) or 'Start'} - {format_date(filters.end_date) or 'Today'}"
        else:
            period = "All transactions"

        sections: list = self._opening_sections(design, "STATEMENT OF ACCOUNT")
        sections.append(PartySection(
            name=statement.customer.name,
            address_lines=split_address(statement.customer.address),
            meta=[
                LabelValue(label="Statement Date", value=format_date(statement.statement_date)),
                LabelValue(label="Period", value=period),
            ],
        ))
        sections.append(TableSection(
            columns=[
                TableColumn(label="DATE"),
                TableColumn(label="REFERENCE"),
                TableColumn(label="DESCRIPTION"),
                TableColumn(label=f"DEBIT ({currency})", align="right"),
                TableColumn(label=f"CREDIT ({currency})", align="right"),
                TableColumn(label=f"BALANCE ({currency})", align="right"),
            ],
            rows=[
                [
                    format_date(entry.date),
                    entry.reference,
                    entry.description,
                    format_currency(entry.debit) if entry.debit > 0 else "-",
                    format_currency(entry.credit) if entry.credit > 0 else "-",
                    format_currency(entry.balance),
                ]
                for entry in statement.entries
            ],
        ))
        totals = []
        if filters.start_date:
            totals.append(LabelValue(label="Opening Balance", value=format_currency(statement.opening_balance)))
        totals.append(LabelValue(label="Total Debits", value=format_currency(statement.total_debits)))
        totals.append(LabelValue(label="Total Credits", value=format_currency(statement.total_credits)))
        sections.append(TotalsSection(
            rows=totals,
            grand_total=LabelValue(label=f"Balance Due ({currency})", value=format_currency(statement.closing_balance)),
        ))
        aging = statement.aging
        sections.append(DetailsSection(
            heading="Aging Summary",
            rows=[
                LabelValue(label="0-30 Days", value=format_currency(aging.days_0_30)),
                LabelValue(label="30-60 Days", value=format_currency(aging.days_30_60)),
                LabelValue(label="60-90 Days", value=format_currency(aging.days_60_90)),
                LabelValue(label="Over 90 Days", value=format_currency(aging.days_90_above)),
            ],
        ))
        sections.extend(self._closing_sections(design))

        name_part = safe_filename(statement.customer.name).replace(" ", "-")
        return DocumentLayout(
            document_type=DocumentTypeEnum.STATEMENT,
            title="STATEMENT OF ACCOUNT",
            filename=f"Statement-{name_part}-{statement.statement_date.isoformat()}.pdf",
            template_id=template.id if template else None,
            style=resolve_style(design),
            sections=sections,
        )

    # --- Shared pieces ---
    def _sales_document(
        self,
        document_type: DocumentTypeEnum,
        title: str,
        number: str,
        record: Union[Invoice, Quotation, ProformaInvoice],
        meta: List[LabelValue],
        template: Optional[DocumentTemplate],
    ) -> DocumentLayout:
        design = template.design if template else DEFAULT_DESIGN
        sections: list = self._opening_sections(design, title)
        sections.append(PartySection(
            name=record.customer.name,
            address_lines=split_address(record.customer.address),
            meta=meta,
        ))
        sections.append(self._items_table(record.items))
        sections.append(self._totals(record))
        sections.extend(self._closing_sections(design))
        return DocumentLayout(
            document_type=document_type,
            title=title,
            filename=f"{safe_filename(number)}.pdf",
            template_id=template.id if template else None,
            style=resolve_style(design),
            sections=sections,
        )

    def _opening_sections(self, design: TemplateDesign, title: str) -> list:
        company = self.company
        sections: list = [
            HeaderSection(
                company_name=company.name.upper(),
                tagline=company.invoice_settings.footer,
                tax_pin=f"PIN No: {company.tax.kra_pin}" if company.tax.kra_pin else None,
                show_logo=design.header.show_logo,
                logo_url=company.branding.logo,
                logo_initial=company.name[:1].upper(),
            )
        ]
        if design.header.show_company_info:
            lines = [company.address.line1]
            if company.address.line2:
                lines.append(company.address.line2)
            if company.contact.phone:
                lines.append(f"Tel: {', '.join(company.contact.phone)}")
            lines.append(f"E-mail: {company.contact.email}")
            if company.contact.website:
                lines.append(f"Website: {company.contact.website}")
            sections.append(CompanyInfoSection(lines=lines))
        sections.append(TitleSection(text=title))
        return sections

    def _closing_sections(self, design: TemplateDesign) -> list:
        sections: list = []
        terms = self.company.invoice_settings.terms or []
        if design.footer.show_terms and terms:
            sections.append(TermsSection(lines=[f"{i}) {term}" for i, term in enumerate(terms, start=1)]))
        if design.footer.show_signature:
            sections.append(SignatureSection())
        if design.footer.custom_text or design.footer.show_page_numbers:
            sections.append(FooterSection(custom_text=design.footer.custom_text))
        return sections

    def _items_table(self, items: List[InvoiceItem]) -> TableSection:
        currency = self.currency_code
        return TableSection(
            columns=[
                TableColumn(label="#", align="center"),
                TableColumn(label="ITEM DESCRIPTION"),
                TableColumn(label="QTY", align="center"),
                TableColumn(label="UNIT", align="center"),
                TableColumn(label=f"UNIT PRICE ({currency})", align="right"),
                TableColumn(label="VAT %", align="center"),
                TableColumn(label=f"TOTAL ({currency})", align="right"),
            ],
            rows=[
                [
                    str(index),
                    item.product.name,
                    format_quantity(item.quantity),
                    item.product.unit or "Piece",
                    format_currency(item.unit_price),
                    format_rate(item.vat_rate),
                    format_currency(item.total),
                ]
                for index, item in enumerate(items, start=1)
            ],
        )

    def _totals(self, record: Union[Invoice, Quotation, ProformaInvoice]) -> TotalsSection:
        rows = [LabelValue(label="Subtotal", value=format_currency(record.subtotal))]
        if self.company.invoice_settings.show_vat:
            rows.append(LabelValue(label="VAT", value=format_currency(record.vat_amount)))
        if record.discount_amount:
            rows.append(LabelValue(label="Discount", value=format_currency(record.discount_amount)))
        additional = record.additional_tax_amount
        if additional is None:
            additional = calculate_additional_tax_amount(record.items)
        if additional:
            rows.append(LabelValue(label="Additional Taxes", value=format_currency(additional)))
        return TotalsSection(
            rows=rows,
            grand_total=LabelValue(
                label=f"Total Amount Inc. VAT ({self.currency_code})",
                value=format_currency(record.total),
            ),
        )
