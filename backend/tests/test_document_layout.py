"""
Tests for document layouts and their HTML rendering.

The layout model is checked directly; HTML is checked by parsing the
rendered markup with a small HTMLParser collector.
"""
from datetime import date
from html.parser import HTMLParser

import pytest

from bizsuite.schemas import DocumentTypeEnum, LineItemTax, StatementFilter
from bizsuite.services.document_layout import DEFAULT_DESIGN, DocumentLayoutBuilder, resolve_style
from bizsuite.services.statement_service import build_statement
from bizsuite.services.template_manager import TemplateManager


class RowCollector(HTMLParser):
    """Collects the cell texts of <tr class="item-row"> rows and <p class="term"> lines."""

    def __init__(self):
        super().__init__()
        self.rows = []
        self.terms = []
        self._row = None
        self._in_cell = False
        self._in_term = False

    def handle_starttag(self, tag, attrs):
        classes = dict(attrs).get("class", "") or ""
        if tag == "tr" and "item-row" in classes.split():
            self._row = []
        elif tag == "td" and self._row is not None:
            self._in_cell = True
            self._row.append("")
        elif tag == "p" and "term" in classes.split():
            self._in_term = True
            self.terms.append("")

    def handle_endtag(self, tag):
        if tag == "tr" and self._row is not None:
            self.rows.append(self._row)
            self._row = None
        elif tag == "td":
            self._in_cell = False
        elif tag == "p":
            self._in_term = False

    def handle_data(self, data):
        if self._in_cell and self._row is not None:
            self._row[-1] += data.strip()
        elif self._in_term:
            self.terms[-1] += data


def parse(html):
    collector = RowCollector()
    collector.feed(html)
    return collector


@pytest.fixture
def builder(company):
    return DocumentLayoutBuilder(company, "KES")


class TestInvoiceLayout:
    def test_sections_in_fixed_order(self, builder, make_invoice):
        layout = builder.build_invoice(make_invoice())
        assert layout.section_kinds == [
            "header", "company_info", "title", "party", "table", "totals", "terms", "signature",
        ]

    def test_title_filename_and_meta(self, builder, make_invoice):
        layout = builder.build_invoice(make_invoice())
        assert layout.title == "INVOICE NO. INV-2024-001"
        assert layout.filename == "INV-2024-001.pdf"
        party = layout.get_section("party")
        assert party.name == "Nairobi West Hospital"
        assert party.address_lines == ["P.O Box 43375-00100", "Gandhi Avenue", "Nairobi"]
        assert [(m.label, m.value) for m in party.meta] == [
            ("Date", "01/03/2024"), ("Due Date", "31/03/2024"), ("LPO NO.", "LPO-7781"),
        ]

    def test_missing_lpo_prints_na(self, builder, make_invoice):
        party = builder.build_invoice(make_invoice(lpo_number=None)).get_section("party")
        assert party.meta[-1].value == "N/A"

    def test_one_row_per_item_in_input_order(self, builder, make_invoice, make_item):
        names = [f"Item {n:02d}" for n in range(1, 13)]
        items = [make_item(name=name, quantity=n, unit_price=100.0 * n) for n, name in enumerate(names, start=1)]
        table = builder.build_invoice(make_invoice(items=items)).get_section("table")
        assert len(table.rows) == 12
        assert [row[1] for row in table.rows] == names
        assert [row[0] for row in table.rows] == [str(n) for n in range(1, 13)]
        assert [c.label for c in table.columns] == [
            "#", "ITEM DESCRIPTION", "QTY", "UNIT", "UNIT PRICE (KES)", "VAT %", "TOTAL (KES)",
        ]

    def test_row_formatting(self, builder, make_invoice, make_item):
        item = make_item(name="Gloves", quantity=3, unit_price=1234.5, unit=None)
        row = builder.build_invoice(make_invoice(items=[item])).get_section("table").rows[0]
        assert row == ["1", "Gloves", "3", "Piece", "1,234.50", "16%", "3,703.50"]

    def test_grand_total_is_record_total(self, builder, make_invoice):
        invoice = make_invoice(total=1234567.891)
        totals = builder.build_invoice(invoice).get_section("totals")
        assert totals.grand_total.label == "Total Amount Inc. VAT (KES)"
        assert totals.grand_total.value == "1,234,567.89"

    def test_discount_and_additional_taxes_listed_when_non_zero(self, builder, make_invoice, make_item):
        taxed = make_item(line_item_taxes=[LineItemTax(id="excise", name="Excise Tax", rate=10)])
        totals = builder.build_invoice(make_invoice(items=[taxed], discount_amount=50)).get_section("totals")
        labels = [row.label for row in totals.rows]
        assert labels == ["Subtotal", "VAT", "Discount", "Additional Taxes"]
        assert totals.rows[-1].value == "250.00"

    def test_zero_discount_and_taxes_are_omitted(self, builder, make_invoice):
        totals = builder.build_invoice(make_invoice()).get_section("totals")
        assert [row.label for row in totals.rows] == ["Subtotal", "VAT"]

    def test_terms_numbered_from_company_settings(self, builder, company, make_invoice):
        terms = builder.build_invoice(make_invoice()).get_section("terms")
        assert len(terms.lines) == len(company.invoice_settings.terms)
        assert terms.lines[0].startswith("1) The company shall have general")

    def test_template_flags_toggle_sections(self, builder, make_invoice, design):
        design.header.show_company_info = False
        design.footer.show_terms = False
        design.footer.show_signature = False
        design.footer.custom_text = "Thank you for your business"
        manager = TemplateManager(seed_defaults=False)
        template = manager.create_template("Bare", None, DocumentTypeEnum.INVOICE, design)
        layout = builder.build_invoice(make_invoice(), template)
        assert layout.section_kinds == ["header", "title", "party", "table", "totals", "footer"]
        assert layout.template_id == template.id
        assert layout.style.show_page_numbers is True

    def test_missing_product_raises(self, builder, make_invoice):
        invoice = make_invoice()
        object.__setattr__(invoice.items[0], "product", None)
        with pytest.raises(AttributeError):
            builder.build_invoice(invoice)


class TestOtherDocuments:
    def test_quotation(self, builder, make_quotation):
        layout = builder.build_quotation(make_quotation())
        assert layout.document_type == DocumentTypeEnum.QUOTATION
        assert layout.title == "QUOTATION NO. QUO-2024-014"
        assert layout.filename == "QUO-2024-014.pdf"
        assert [m.label for m in layout.get_section("party").meta] == ["Date", "Valid Until"]

    def test_proforma(self, builder, make_proforma):
        layout = builder.build_proforma(make_proforma())
        assert layout.title == "PROFORMA INVOICE NO. PRO-2024-003"
        assert layout.filename == "PRO-2024-003.pdf"

    def test_payment_receipt(self, builder, make_payment):
        layout = builder.build_payment_receipt(make_payment(notes="Part payment"))
        assert layout.filename == "Receipt-QGH7TY2K9L.pdf"
        assert "table" not in layout.section_kinds
        details = layout.get_section("details")
        values = {row.label: row.value for row in details.rows}
        assert values["Amount (KES)"] == "1,000.00"
        assert values["Payment Method"] == "MPESA"
        assert values["Notes"] == "Part payment"

    def test_statement(self, builder, customer, make_invoice, make_payment):
        statement = build_statement(
            customer,
            [make_invoice(total=5000.0)],
            [make_payment(amount=2000.0)],
            StatementFilter(),
            today=date(2024, 4, 15),
        )
        layout = builder.build_statement(statement)
        assert layout.filename == "Statement-Nairobi-West-Hospital-2024-04-15.pdf"
        table = layout.get_section("table")
        assert [row[5] for row in table.rows] == ["5,000.00", "3,000.00"]
        assert layout.get_section("totals").grand_total.value == "3,000.00"


class TestStyle:
    def test_default_design_has_grey_table_header_and_no_page_numbers(self):
        style = resolve_style(DEFAULT_DESIGN)
        assert style.table_header_background == "#f0f0f0"
        assert style.table_header_text == "#000000"
        assert style.show_page_numbers is False

    def test_dark_header_gets_white_text(self, design):
        assert resolve_style(design).table_header_text == "#ffffff"


class TestHtmlRendering:
    def test_rendered_rows_match_items(self, pdf_service, make_invoice, make_item):
        items = [make_item(name=f"Product {n}", quantity=n) for n in range(1, 31)]
        html = pdf_service.render_html(pdf_service.build_invoice_layout(make_invoice(items=items)))
        rows = parse(html).rows
        assert len(rows) == 30
        assert [row[1] for row in rows] == [f"Product {n}" for n in range(1, 31)]

    def test_totals_value_in_html(self, pdf_service, make_invoice):
        html = pdf_service.render_html(pdf_service.build_invoice_layout(make_invoice(total=98765.4)))
        assert "Total Amount Inc. VAT (KES)" in html
        assert "98,765.40" in html

    def test_long_terms_are_never_truncated(self, pdf_service, make_invoice):
        long_terms = [f"Clause {n}: " + "goods remain the property of the company until paid in full. " * 20 for n in range(1, 41)]
        settings = pdf_service.get_company_settings().model_copy(deep=True)
        settings.invoice_settings.terms = long_terms
        pdf_service.update_company_settings(settings)

        layout = pdf_service.build_invoice_layout(make_invoice())
        first = pdf_service.render_html(layout)
        second = pdf_service.render_html(layout)
        terms = parse(first).terms
        assert len(terms) == 40
        assert terms[-1].startswith("40) Clause 40:")
        assert first == second

    def test_customer_text_is_escaped(self, pdf_service, make_invoice, customer):
        hostile = customer.model_copy(update={"name": "<script>alert(1)</script>"})
        html = pdf_service.render_html(pdf_service.build_invoice_layout(make_invoice(customer=hostile)))
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_design_values_cannot_leave_the_style_block(self, pdf_service, template_manager, design, make_invoice):
        hostile = design.model_copy(deep=True)
        hostile.colors.primary = (
            "red}</style><script>alert(document.domain)</script>"
            "<link rel=attachment href=file:///etc/passwd><style>x{"
        )
        hostile.fonts.body = "Arial; } body { background: url(file:///etc/passwd)"
        template = template_manager.create_template("Hostile", "", DocumentTypeEnum.INVOICE, hostile)
        html = pdf_service.render_html(pdf_service.build_invoice_layout(make_invoice(), template.id))
        assert "<script" not in html
        assert "<link" not in html
        assert html.count("</style>") == 1
        assert "url(file" not in html

    def test_valid_colours_are_kept(self, design):
        style = resolve_style(design)
        assert style.primary_color == "#2563eb"
        assert style.table_header_text == "#ffffff"

    def test_layout_stylesheet_is_included(self, pdf_service, template_manager, make_quotation):
        # default-quotation uses the modern layout
        html = pdf_service.render_html(pdf_service.build_quotation_layout(make_quotation()))
        assert "layout-modern" in html
        assert ".layout-modern .doc-title h1" in html

    def test_page_counter_only_when_enabled(self, pdf_service, template_manager, make_invoice, make_quotation):
        invoice_html = pdf_service.render_html(pdf_service.build_invoice_layout(make_invoice()))
        assert "counter(pages)" in invoice_html
        template_manager.update_template("default-invoice", {"design": DEFAULT_DESIGN})
        invoice_html = pdf_service.render_html(pdf_service.build_invoice_layout(make_invoice()))
        assert "counter(pages)" not in invoice_html
