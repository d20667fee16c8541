"""
Line item tax and payment arithmetic.

Additional taxes sit on top of VAT. Non-compound taxes apply to the discounted
line amount; compound taxes apply to that amount plus every non-compound tax.
"""
from typing import Dict, Iterable, List, Optional

from bizsuite.schemas.invoice import Invoice, InvoiceItem, InvoiceStatusEnum, LineItemTax

COMMON_LINE_ITEM_TAXES: Dict[str, LineItemTax] = {
    "EXCISE_TAX": LineItemTax(id="excise", name="Excise Tax", rate=10),
    "LUXURY_TAX": LineItemTax(id="luxury", name="Luxury Tax", rate=5),
    "ENVIRONMENTAL_LEVY": LineItemTax(id="env_levy", name="Environmental Levy", rate=2),
    "IMPORT_DUTY": LineItemTax(id="import_duty", name="Import Duty", rate=25),
    "SERVICE_CHARGE": LineItemTax(id="service_charge", name="Service Charge", rate=10, is_compound_tax=True),
}


def line_base_amount(item: InvoiceItem) -> float:
    gross = item.quantity * item.unit_price
    return gross - gross * item.discount / 100


def _tax_amounts(item: InvoiceItem) -> List[float]:
    taxes = item.line_item_taxes or []
    base = line_base_amount(item)
    non_compound_total = sum(base * tax.rate / 100 for tax in taxes if not tax.is_compound_tax)
    compound_base = base + non_compound_total
    return [
        (compound_base if tax.is_compound_tax else base) * tax.rate / 100
        for tax in taxes
    ]


def calculate_line_item_taxes(item: InvoiceItem) -> float:
    """Total additional tax on one line; 0 when the line carries no extra taxes."""
    return sum(_tax_amounts(item))


def calculate_additional_tax_amount(items: Iterable[InvoiceItem]) -> float:
    return sum(calculate_line_item_taxes(item) for item in items)


def update_line_item_tax_amounts(item: InvoiceItem) -> InvoiceItem:
    """Copy of the item with each tax's amount recomputed from its rate."""
    if not item.line_item_taxes:
        return item
    taxes = [
        tax.model_copy(update={"amount": amount})
        for tax, amount in zip(item.line_item_taxes, _tax_amounts(item))
    ]
    return item.model_copy(update={"line_item_taxes": taxes})


def get_tax_by_id(tax_id: str) -> Optional[LineItemTax]:
    for tax in COMMON_LINE_ITEM_TAXES.values():
        if tax.id == tax_id:
            return tax.model_copy()
    return None


def get_available_taxes() -> List[LineItemTax]:
    return [tax.model_copy() for tax in COMMON_LINE_ITEM_TAXES.values()]


# --- Payments ---
def outstanding_balance(invoice: Invoice) -> float:
    if invoice.balance:
        return invoice.balance
    return max(invoice.total - invoice.amount_paid, 0)


def payment_rejection_reason(invoice: Invoice, amount: float) -> Optional[str]:
    """None when the payment can be recorded against the invoice."""
    if invoice.status == InvoiceStatusEnum.CANCELLED:
        return "Cannot record a payment against a cancelled invoice."
    if invoice.status == InvoiceStatusEnum.PAID:
        return "Invoice is already fully paid."
    if amount <= 0:
        return "Payment amount must be greater than zero."
    balance = outstanding_balance(invoice)
    # Half a cent of slack for float totals
    if amount - balance > 0.005:
        return f"Payment amount {amount:,.2f} exceeds the outstanding balance {balance:,.2f}."
    return None
