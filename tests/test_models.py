from branded_docs.core.models.branding import TenantBranding, coerce_branding
from branded_docs.core.models.documents import BusinessReport, Invoice, ProjectProgress, coerce_record

import pytest


def test_invoice_accepts_camel_and_snake_case():
    camel = Invoice.from_dict({"invoiceNumber": "A1", "lineItems": [{"unitPrice": "12.5", "quantity": "2"}]})
    snake = Invoice.from_dict({"invoice_number": "A1", "line_items": [{"unit_price": 12.5, "quantity": 2}]})
    assert camel == snake
    assert camel.line_items[0].unit_price == 12.5


def test_invoice_tolerates_missing_and_bad_fields():
    invoice = Invoice.from_dict({"seller": None, "lineItems": "oops", "grandTotal": "n/a"})
    assert invoice.seller.name == ""
    assert invoice.line_items == ()
    assert invoice.grand_total is None
    assert invoice.flow == "sell"
    assert invoice.zatca is None


def test_non_finite_numbers_become_zero():
    invoice = Invoice.from_dict({"lineItems": [{"quantity": float("nan"), "unitPrice": float("inf")}]})
    assert invoice.line_items[0].quantity == 0
    assert invoice.line_items[0].unit_price == 0


def test_party_display_name_prefers_language(sample_invoice):
    seller = Invoice.from_dict(sample_invoice).seller
    assert seller.display_name("en") == "Acme Trading"
    assert seller.display_name("ar") == "أكمي"
    assert seller.address_line == "Riyadh, Olaya"


def test_report_breakdown_rows(sample_report):
    report = BusinessReport.from_dict(sample_report)
    assert report.net == -500
    assert report.sales.invoice_count == 4
    assert report.expenses.expense_count == 3
    assert report.sales_by_transaction_type[0].key == "B2B"
    assert report.top_customers[0].amount == 8000
    assert report.expenses_by_category == ()


def test_project_update_authors(sample_project):
    project = ProjectProgress.from_dict(sample_project)
    authors = [update.created_by for update in project.progress_updates]
    assert authors == ["Omar", "pm@example.com", ""]
    assert project.display_name("ar") == "تجهيز المستودع"


def test_coerce_record_passes_built_records_through(sample_invoice):
    invoice = Invoice.from_dict(sample_invoice)
    assert coerce_record("invoice", invoice) is invoice
    with pytest.raises(ValueError):
        coerce_record("receipt", {})


def test_branding_from_tenant_document():
    brand = coerce_branding({"branding": {"primaryColor": "#112233", "invoicePdfTemplate": "3"}})
    assert brand == TenantBranding(primary_color="#112233", invoice_pdf_template=3)
    assert coerce_branding(None) == TenantBranding()
    assert coerce_branding({"invoicePdfTemplate": "fancy"}).invoice_pdf_template is None


@pytest.mark.parametrize("template", [float("inf"), float("-inf"), float("nan"), "1e400"])
def test_non_finite_template_id_is_dropped(template):
    assert TenantBranding.from_dict({"invoicePdfTemplate": template}).invoice_pdf_template is None


@pytest.mark.parametrize("value", ["NaN", float("nan"), "inf", float("-inf")])
def test_non_finite_invoice_totals_are_treated_as_missing(value):
    invoice = Invoice.from_dict({"totalTax": value, "grandTotal": value, "taxableAmount": value})
    assert (invoice.total_tax, invoice.grand_total, invoice.taxable_amount) == (None, None, None)
