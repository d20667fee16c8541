"""
Built-in document templates.

Every built-in is seeded active and default for its type; defaults can never be
deleted. Only the invoice, quotation and receipt built-ins are seeded unless
SEED_ALL_DOCUMENT_TEMPLATES is set.
"""
from typing import List, Optional

from bizsuite.schemas.template import DocumentTemplate, DocumentTypeEnum, TemplateDesign


def _design(
    layout: str,
    colors: tuple,
    sizes: tuple,
    spacing: tuple,
    *,
    show_logo: bool = True,
    logo_position: str = "left",
    header_background: Optional[str] = None,
    show_terms: bool = True,
    show_signature: bool = True,
    show_page_numbers: bool = True,
    custom_text: Optional[str] = None,
    table_header: str,
    alternate_row: Optional[str] = None,
    border_style: str = "light",
) -> TemplateDesign:
    primary, secondary, accent, text = colors
    heading, body, small = sizes
    margins, line_height, section_gap = spacing
    return TemplateDesign.model_validate({
        "layout": layout,
        "colors": {"primary": primary, "secondary": secondary, "accent": accent, "text": text},
        "fonts": {"heading": "helvetica", "body": "helvetica", "size": {"heading": heading, "body": body, "small": small}},
        "spacing": {"margins": margins, "line_height": line_height, "section_gap": section_gap},
        "header": {
            "show_logo": show_logo,
            "logo_position": logo_position,
            "show_company_info": True,
            "background_color": header_background,
        },
        "footer": {
            "show_terms": show_terms,
            "show_signature": show_signature,
            "show_page_numbers": show_page_numbers,
            "custom_text": custom_text,
        },
        "table": {
            "header_background_color": table_header,
            "alternate_row_color": alternate_row,
            "border_style": border_style,
        },
    })


def _builtin(template_id: str, name: str, description: str, doc_type: DocumentTypeEnum, design: TemplateDesign) -> DocumentTemplate:
    return DocumentTemplate(
        id=template_id,
        name=name,
        description=description,
        type=doc_type,
        is_active=True,
        is_default=True,
        design=design,
    )


def core_default_templates() -> List[DocumentTemplate]:
    return [
        _builtin(
            "default-invoice", "Standard Invoice", "Professional invoice template with company branding",
            DocumentTypeEnum.INVOICE,
            _design(
                "standard", ("#2563eb", "#64748b", "#059669", "#1f2937"), (16, 10, 8), (20, 1.5, 15),
                table_header="#f8fafc", alternate_row="#f1f5f9", border_style="light",
            ),
        ),
        _builtin(
            "default-quotation", "Modern Quotation", "Modern quotation template with colorful design",
            DocumentTypeEnum.QUOTATION,
            _design(
                "modern", ("#7c3aed", "#64748b", "#f59e0b", "#374151"), (18, 11, 9), (25, 1.6, 20),
                logo_position="center", header_background="#faf5ff", show_signature=False,
                table_header="#7c3aed", border_style="medium",
            ),
        ),
        _builtin(
            "default-receipt", "Simple Receipt", "Clean minimal receipt template",
            DocumentTypeEnum.RECEIPT,
            _design(
                "minimal", ("#000000", "#6b7280", "#10b981", "#111827"), (14, 9, 7), (15, 1.4, 10),
                show_logo=False, show_terms=False, show_signature=False, show_page_numbers=False,
                table_header="#f9fafb", border_style="none",
            ),
        ),
    ]


def extended_default_templates() -> List[DocumentTemplate]:
    return [
        _builtin(
            "default-packing-list", "Standard Packing List", "Detailed packing list with item tracking",
            DocumentTypeEnum.PACKING_LIST,
            _design(
                "standard", ("#dc2626", "#64748b", "#f97316", "#1f2937"), (15, 9, 8), (18, 1.4, 12),
                show_terms=False, custom_text="Please verify items upon receipt",
                table_header="#fee2e2", alternate_row="#fef2f2", border_style="medium",
            ),
        ),
        _builtin(
            "default-delivery-note", "Standard Delivery Note", "Professional delivery confirmation template",
            DocumentTypeEnum.DELIVERY_NOTE,
            _design(
                "standard", ("#059669", "#64748b", "#10b981", "#1f2937"), (15, 9, 8), (18, 1.4, 12),
                show_terms=False, custom_text="Customer signature required upon delivery",
                table_header="#ecfdf5", alternate_row="#f0fdf4", border_style="light",
            ),
        ),
        _builtin(
            "default-purchase-order", "Standard Purchase Order", "Professional supplier ordering template",
            DocumentTypeEnum.PURCHASE_ORDER,
            _design(
                "corporate", ("#1e40af", "#64748b", "#3b82f6", "#1f2937"), (16, 10, 8), (20, 1.5, 15),
                custom_text="Please confirm receipt of this purchase order",
                table_header="#dbeafe", alternate_row="#eff6ff", border_style="medium",
            ),
        ),
        _builtin(
            "default-credit-note", "Standard Credit Note", "Professional credit note template",
            DocumentTypeEnum.CREDIT_NOTE,
            _design(
                "standard", ("#dc2626", "#64748b", "#f87171", "#1f2937"), (15, 10, 8), (20, 1.5, 15),
                table_header="#fee2e2", alternate_row="#fef2f2", border_style="light",
            ),
        ),
        _builtin(
            "default-grn", "Standard GRN", "Goods received note for inventory tracking",
            DocumentTypeEnum.GOODS_RECEIVED_NOTE,
            _design(
                "minimal", ("#7c2d12", "#64748b", "#ea580c", "#1f2937"), (14, 9, 7), (15, 1.4, 12),
                show_terms=False, custom_text="Quality inspection completed",
                table_header="#fed7aa", alternate_row="#ffedd5", border_style="light",
            ),
        ),
        _builtin(
            "default-proforma", "Standard Proforma", "Professional proforma invoice template",
            DocumentTypeEnum.PROFORMA,
            _design(
                "modern", ("#7c3aed", "#64748b", "#a855f7", "#374151"), (17, 10, 8), (22, 1.5, 16),
                logo_position="center", header_background="#faf5ff", show_signature=False,
                custom_text="This is a proforma invoice - not a tax invoice",
                table_header="#e9d5ff", alternate_row="#f3e8ff", border_style="medium",
            ),
        ),
        _builtin(
            "default-statement", "Account Statement", "Customer account statement template",
            DocumentTypeEnum.STATEMENT,
            _design(
                "corporate", ("#374151", "#6b7280", "#9ca3af", "#111827"), (16, 9, 7), (20, 1.4, 14),
                show_terms=False, show_signature=False,
                custom_text="Please remit payment for outstanding amounts",
                table_header="#f3f4f6", alternate_row="#f9fafb", border_style="light",
            ),
        ),
        _builtin(
            "default-mtn", "Material Transfer Note", "Internal material transfer tracking",
            DocumentTypeEnum.MATERIAL_TRANSFER_NOTE,
            _design(
                "minimal", ("#0f766e", "#64748b", "#14b8a6", "#1f2937"), (14, 9, 7), (15, 1.3, 10),
                show_logo=False, show_terms=False, show_page_numbers=False,
                custom_text="Internal use only",
                table_header="#ccfbf1", alternate_row="#f0fdfa", border_style="light",
            ),
        ),
        _builtin(
            "default-debit-note", "Standard Debit Note", "Professional debit note template",
            DocumentTypeEnum.DEBIT_NOTE,
            _design(
                "standard", ("#b91c1c", "#64748b", "#ef4444", "#1f2937"), (15, 10, 8), (20, 1.5, 15),
                table_header="#fecaca", alternate_row="#fef2f2", border_style="light",
            ),
        ),
    ]


def default_templates(include_extended: bool = False) -> List[DocumentTemplate]:
    templates = core_default_templates()
    if include_extended:
        templates.extend(extended_default_templates())
    return templates
