"""
Derived invoice amounts. Some records omit the derived line fields, so they
are recomputed here exactly the way the invoice service computes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from branded_docs.core.models.documents import Invoice, InvoiceLine


@dataclass(frozen=True)
class LineAmounts:
    quantity: float
    unit_price: float
    tax_rate: float
    line_total: float
    tax_amount: float
    line_total_with_tax: float


def derive_line_amounts(line: InvoiceLine) -> LineAmounts:
    line_total = line.line_total if line.line_total is not None else line.quantity * line.unit_price
    tax_amount = line.tax_amount if line.tax_amount is not None else line_total * line.tax_rate / 100
    with_tax = line.line_total_with_tax if line.line_total_with_tax is not None else line_total + tax_amount
    return LineAmounts(
        quantity=line.quantity,
        unit_price=line.unit_price,
        tax_rate=line.tax_rate,
        line_total=line_total,
        tax_amount=tax_amount,
        line_total_with_tax=with_tax,
    )


@dataclass(frozen=True)
class InvoiceSummary:
    taxable_amount: float
    total_tax: float
    grand_total: float
    tax_rate: float | None


def uniform_tax_rate(lines: Sequence[LineAmounts]) -> float | None:
    rates = {round(line.tax_rate, 4) for line in lines}
    if len(rates) == 1:
        return rates.pop()
    return None


def derive_invoice_totals(invoice: Invoice, lines: Sequence[LineAmounts] | None = None) -> InvoiceSummary:
    """Prefer the record's own totals; fall back to sums of the derived lines."""
    if lines is None:
        lines = [derive_line_amounts(line) for line in invoice.line_items]
    taxable = invoice.taxable_amount
    if taxable is None:
        taxable = sum(line.line_total for line in lines)
    tax = invoice.total_tax
    if tax is None:
        tax = sum(line.tax_amount for line in lines)
    grand = invoice.grand_total
    if grand is None:
        grand = taxable + tax
    return InvoiceSummary(
        taxable_amount=float(taxable),
        total_tax=float(tax),
        grand_total=float(grand),
        tax_rate=uniform_tax_rate(lines),
    )
