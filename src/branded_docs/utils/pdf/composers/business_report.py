from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Tuple

from branded_docs.core.models.documents import BreakdownRow, BusinessReport
from branded_docs.core.services.formatting import DEFAULT_CURRENCY, format_currency, format_date, format_datetime
from branded_docs.core.services.labels import label
from branded_docs.utils.pdf.core.bidi import RenderContext
from branded_docs.utils.pdf.core.layout_common import color
from branded_docs.utils.pdf.core.ops import (
    DocumentAssets,
    DrawFooterPass,
    DrawHeader,
    DrawKpiCards,
    DrawSectionTitle,
    DrawTable,
    KpiCard,
    TableRow,
)
from branded_docs.utils.pdf.core.table_layout import ColumnSpec
from branded_docs.utils.pdf.core.theme import Theme


def _rows(items: Sequence[BreakdownRow], cells) -> Tuple[TableRow, ...]:
    return tuple(TableRow(cells=cells(item)) for item in items)


def compose_business_report(
    report: BusinessReport,
    theme: Theme,
    ctx: RenderContext,
    assets: Optional[DocumentAssets] = None,
    *,
    generated_at: Optional[datetime] = None,
    default_currency: str = DEFAULT_CURRENCY,
) -> list:
    lang = ctx.language
    assets = assets or DocumentAssets()
    currency = report.currency or default_currency

    def money(value) -> str:
        return format_currency(value, lang, currency)

    period = f"{format_date(report.period.start_date, lang)} - {format_date(report.period.end_date, lang)}"
    cards = (
        KpiCard(
            title=label("sales", lang),
            subtitle=label("invoices_count", lang, count=report.sales.invoice_count),
            value=money(report.sales.grand_total),
            value_color=color("positive"),
        ),
        KpiCard(
            title=label("purchases", lang),
            subtitle=label("invoices_count", lang, count=report.purchases.invoice_count),
            value=money(report.purchases.grand_total),
            value_color=color("purchases"),
        ),
        KpiCard(
            title=label("expenses", lang),
            subtitle=label("expenses_count", lang, count=report.expenses.expense_count),
            value=money(report.expenses.total_amount),
            value_color=color("expenses"),
        ),
        KpiCard(
            title=label("net_profit", lang),
            subtitle=label("net_subtitle", lang),
            value=money(report.net),
            value_color=color("positive") if report.net >= 0 else color("negative"),
        ),
    )
    no_data = label("no_data", lang)

    return [
        DrawHeader(
            title=label("report_title", lang),
            subtitle=f"{label('period', lang)}: {period}",
            logo=assets.logo,
        ),
        DrawKpiCards(cards=cards),
        DrawSectionTitle(label("sales_by_type", lang)),
        DrawTable(
            columns=(
                ColumnSpec("type", label("col_type", lang), 175, min_width=80, flex=True),
                ColumnSpec("invoices", label("col_invoices", lang), 90, min_width=56, align="center"),
                ColumnSpec("revenue", label("col_revenue", lang), 125, min_width=80, align="end"),
                ColumnSpec("tax", label("col_tax", lang), 125, min_width=80, align="end"),
            ),
            rows=_rows(
                report.sales_by_transaction_type,
                lambda r: (r.key or "-", str(r.count), money(r.amount), money(r.tax)),
            ),
            placeholder=no_data,
        ),
        DrawSectionTitle(label("top_customers", lang)),
        DrawTable(
            columns=(
                ColumnSpec("customer", label("col_customer", lang), 240, min_width=80, flex=True),
                ColumnSpec("invoices", label("col_invoices", lang), 110, min_width=56, align="center"),
                ColumnSpec("revenue", label("col_revenue", lang), 165, min_width=80, align="end"),
            ),
            rows=_rows(report.top_customers, lambda r: (r.key or "-", str(r.count), money(r.amount))),
            placeholder=no_data,
        ),
        DrawSectionTitle(label("expenses_by_category", lang)),
        DrawTable(
            columns=(
                ColumnSpec("category", label("col_category", lang), 240, min_width=80, flex=True),
                ColumnSpec("count", label("col_count", lang), 110, min_width=56, align="center"),
                ColumnSpec("total", label("col_total", lang), 165, min_width=80, align="end"),
            ),
            rows=_rows(report.expenses_by_category, lambda r: (r.key or "-", str(r.count), money(r.amount))),
            placeholder=no_data,
        ),
        DrawFooterPass(
            generated_label=label("generated", lang),
            generated_at=format_datetime(generated_at or datetime.now(), lang),
            page_label=label("page", lang),
        ),
    ]


def report_file_stem(report: BusinessReport, language: str) -> str:
    return label("report_file", language)
