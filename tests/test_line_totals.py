import pytest

from branded_docs.core.calculations.line_totals import derive_invoice_totals, derive_line_amounts, uniform_tax_rate
from branded_docs.core.models.documents import Invoice, InvoiceLine


def test_derives_tax_from_line_total_and_rate():
    amounts = derive_line_amounts(InvoiceLine(line_total=100, tax_rate=15))
    assert amounts.tax_amount == pytest.approx(15)
    assert amounts.line_total_with_tax == pytest.approx(115)


def test_derives_line_total_from_quantity_and_price():
    amounts = derive_line_amounts(InvoiceLine(quantity=2, unit_price=50, tax_rate=15))
    assert amounts.line_total == pytest.approx(100)
    assert amounts.tax_amount == pytest.approx(15)
    assert amounts.line_total_with_tax == pytest.approx(115)


def test_supplied_line_amounts_win():
    amounts = derive_line_amounts(
        InvoiceLine(quantity=2, unit_price=50, tax_rate=15, line_total=90, tax_amount=13.5, line_total_with_tax=103.5)
    )
    assert (amounts.line_total, amounts.tax_amount, amounts.line_total_with_tax) == (90, 13.5, 103.5)


def test_invoice_totals_fall_back_to_line_sums(sample_invoice):
    summary = derive_invoice_totals(Invoice.from_dict(sample_invoice))
    assert summary.taxable_amount == pytest.approx(100)
    assert summary.total_tax == pytest.approx(15)
    assert summary.grand_total == pytest.approx(115)
    assert summary.tax_rate == 15


def test_invoice_totals_prefer_record_values(sample_invoice):
    record = dict(sample_invoice, taxableAmount=200, totalTax=30, grandTotal=230)
    summary = derive_invoice_totals(Invoice.from_dict(record))
    assert (summary.taxable_amount, summary.total_tax, summary.grand_total) == (200, 30, 230)


def test_empty_invoice_totals_are_zero():
    summary = derive_invoice_totals(Invoice())
    assert (summary.taxable_amount, summary.total_tax, summary.grand_total) == (0, 0, 0)
    assert summary.tax_rate is None


def test_mixed_rates_have_no_uniform_rate():
    lines = [derive_line_amounts(InvoiceLine(line_total=10, tax_rate=rate)) for rate in (15, 5)]
    assert uniform_tax_rate(lines) is None


def test_non_finite_record_totals_use_line_sums(sample_invoice):
    record = dict(sample_invoice, totalTax="NaN", grandTotal="Infinity")
    summary = derive_invoice_totals(Invoice.from_dict(record))
    assert summary.total_tax == pytest.approx(15)
    assert summary.grand_total == pytest.approx(115)
