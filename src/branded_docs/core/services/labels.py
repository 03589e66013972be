from __future__ import annotations

from typing import Dict

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "invoice_title": "TAX INVOICE",
        "invoice_number": "Invoice Number",
        "issue_date": "Issue Date",
        "type": "Type",
        "status": "Status",
        "flow": "Flow",
        "currency": "Currency",
        "from": "From",
        "bill_to": "Bill To",
        "supplier": "Supplier",
        "vat": "VAT",
        "col_index": "#",
        "col_description": "Description",
        "col_qty": "Qty",
        "col_unit_price": "Unit Price",
        "col_tax": "Tax",
        "col_total": "Total",
        "subtotal": "Subtotal",
        "vat_rate": "VAT ({rate}%)",
        "grand_total": "TOTAL",
        "no_line_items": "No line items",
        "no_data": "No data",
        "invoice_note": "This invoice was generated electronically and is valid without signature.",
        "draft": "Draft",
        "report_title": "Business Report",
        "period": "Period",
        "sales": "Sales",
        "purchases": "Purchases",
        "expenses": "Expenses",
        "net_profit": "Net Profit",
        "invoices_count": "Invoices: {count}",
        "expenses_count": "Expenses: {count}",
        "net_subtitle": "After purchases and expenses",
        "sales_by_type": "Sales by Transaction Type",
        "top_customers": "Top Customers",
        "expenses_by_category": "Expenses by Category",
        "col_type": "Type",
        "col_invoices": "Invoices",
        "col_revenue": "Revenue",
        "col_customer": "Customer",
        "col_category": "Category",
        "col_count": "Count",
        "project_title": "Project Progress Report",
        "code": "Code",
        "project": "Project",
        "owner": "Owner",
        "due_date": "Due Date",
        "progress": "Progress",
        "budget": "Budget",
        "progress_history": "Progress History",
        "col_date": "Date",
        "col_progress": "Progress",
        "col_note": "Note",
        "col_by": "By",
        "generated": "Generated",
        "page": "Page",
        "report_file": "business_report",
    },
    "ar": {
        "invoice_title": "فاتورة ضريبية",
        "invoice_number": "رقم الفاتورة",
        "issue_date": "تاريخ الإصدار",
        "type": "النوع",
        "status": "الحالة",
        "flow": "الاتجاه",
        "currency": "العملة",
        "from": "من",
        "bill_to": "العميل",
        "supplier": "المورد",
        "vat": "الرقم الضريبي",
        "col_index": "#",
        "col_description": "الوصف",
        "col_qty": "الكمية",
        "col_unit_price": "سعر الوحدة",
        "col_tax": "الضريبة",
        "col_total": "الإجمالي",
        "subtotal": "المجموع الفرعي",
        "vat_rate": "ضريبة القيمة المضافة ({rate}%)",
        "grand_total": "الإجمالي",
        "no_line_items": "لا توجد بنود",
        "no_data": "لا توجد بيانات",
        "invoice_note": "تم إنشاء هذه الفاتورة إلكترونياً وهي صالحة بدون توقيع.",
        "draft": "مسودة",
        "report_title": "تقرير الأعمال",
        "period": "الفترة",
        "sales": "المبيعات",
        "purchases": "المشتريات",
        "expenses": "المصاريف",
        "net_profit": "صافي الربح",
        "invoices_count": "فواتير: {count}",
        "expenses_count": "مصروفات: {count}",
        "net_subtitle": "بعد المشتريات والمصاريف",
        "sales_by_type": "المبيعات حسب النوع",
        "top_customers": "أفضل العملاء",
        "expenses_by_category": "المصاريف حسب التصنيف",
        "col_type": "النوع",
        "col_invoices": "عدد الفواتير",
        "col_revenue": "الإيراد",
        "col_customer": "العميل",
        "col_category": "التصنيف",
        "col_count": "العدد",
        "project_title": "تقرير تقدم المشروع",
        "code": "الكود",
        "project": "المشروع",
        "owner": "المالك",
        "due_date": "تاريخ الانتهاء",
        "progress": "التقدم",
        "budget": "الميزانية",
        "progress_history": "سجل التقدم",
        "col_date": "التاريخ",
        "col_progress": "التقدم",
        "col_note": "الملاحظة",
        "col_by": "بواسطة",
        "generated": "تاريخ الإنشاء",
        "page": "صفحة",
        "report_file": "تقرير_الأعمال",
    },
}


def normalize_language(language) -> str:
    return "ar" if language == "ar" else "en"


def label(key: str, language: str = "en", **params) -> str:
    table = LABELS.get(normalize_language(language), LABELS["en"])
    text = table.get(key) or LABELS["en"].get(key, key)
    if params:
        return text.format(**params)
    return text
