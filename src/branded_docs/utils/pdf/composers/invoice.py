"""
Invoice composer: header, meta card, party boxes, line items, totals, note.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from branded_docs.core.calculations.line_totals import LineAmounts, derive_invoice_totals, derive_line_amounts
from branded_docs.core.models.documents import Invoice, Party
from branded_docs.core.services.formatting import DEFAULT_CURRENCY, format_currency, format_datetime
from branded_docs.core.services.labels import label
from branded_docs.utils.pdf.core.bidi import RenderContext
from branded_docs.utils.pdf.core.ops import (
    DocumentAssets,
    DrawFooterPass,
    DrawHeader,
    DrawMetaCard,
    DrawNote,
    DrawPartyBoxes,
    DrawTable,
    DrawTotalsBlock,
    MetaPair,
    PartyBox,
    TableRow,
    TotalsRow,
)
from branded_docs.utils.pdf.core.table_layout import ColumnSpec
from branded_docs.utils.pdf.core.theme import Theme


def format_number(value: float) -> str:
    """Quantities and rates: no trailing zeros (2 -> "2", 2.5 -> "2.5")."""
    numeric = float(value)
    if numeric.is_integer():
        return str(int(numeric))
    return f"{numeric:.4f}".rstrip("0").rstrip(".")


def invoice_columns(language: str) -> Tuple[ColumnSpec, ...]:
    return (
        ColumnSpec("idx", label("col_index", language), 28, min_width=22, align="center"),
        ColumnSpec("desc", label("col_description", language), 200, min_width=80, flex=True),
        ColumnSpec("qty", label("col_qty", language), 44, min_width=32, align="center"),
        ColumnSpec("unit", label("col_unit_price", language), 84, min_width=60, align="end"),
        ColumnSpec("tax", label("col_tax", language), 72, min_width=52, align="end"),
        ColumnSpec("total", label("col_total", language), 92, min_width=64, align="end"),
    )


def _party_box(party: Party, title: str, language: str) -> PartyBox:
    return PartyBox(
        title=title,
        name=party.display_name(language),
        vat_label=label("vat", language),
        vat_number=party.vat_number,
        address=party.address_line,
    )


def line_rows(invoice: Invoice, amounts: List[LineAmounts], language: str, currency: str) -> Tuple[TableRow, ...]:
    rows = []
    for index, (line, amount) in enumerate(zip(invoice.line_items, amounts), start=1):
        rows.append(
            TableRow(
                cells=(
                    str(index),
                    line.display_name(language),
                    format_number(amount.quantity),
                    format_currency(amount.unit_price, language, currency),
                    format_currency(amount.tax_amount, language, currency),
                    format_currency(amount.line_total_with_tax, language, currency),
                )
            )
        )
    return tuple(rows)


def compose_invoice(
    invoice: Invoice,
    theme: Theme,
    ctx: RenderContext,
    assets: Optional[DocumentAssets] = None,
    *,
    generated_at: Optional[datetime] = None,
    default_currency: str = DEFAULT_CURRENCY,
) -> list:
    lang = ctx.language
    assets = assets or DocumentAssets()
    currency = invoice.currency or default_currency
    amounts = [derive_line_amounts(line) for line in invoice.line_items]
    summary = derive_invoice_totals(invoice, amounts)

    status = invoice.zatca.submission_status if invoice.zatca else ""
    vat_label = label("vat", lang)
    if summary.tax_rate is not None and amounts:
        vat_label = label("vat_rate", lang, rate=format_number(summary.tax_rate))
    buyer_title = label("supplier" if invoice.is_purchase else "bill_to", lang)

    return [
        DrawHeader(
            title=label("invoice_title", lang),
            subtitle=invoice.seller.display_name(lang),
            number_label=label("invoice_number", lang),
            number=invoice.invoice_number or "-",
            date_label=label("issue_date", lang),
            date=format_datetime(invoice.issue_date, lang),
            logo=assets.logo,
            qr=assets.qr,
        ),
        DrawMetaCard(
            pairs=(
                MetaPair(label("type", lang), invoice.transaction_type or "B2C"),
                MetaPair(label("status", lang), status or label("draft", lang)),
                MetaPair(label("flow", lang), invoice.flow or "sell"),
                MetaPair(label("currency", lang), currency),
            )
        ),
        DrawPartyBoxes(
            seller=_party_box(invoice.seller, label("from", lang), lang),
            buyer=_party_box(invoice.buyer, buyer_title, lang),
        ),
        DrawTable(
            columns=invoice_columns(lang),
            rows=line_rows(invoice, amounts, lang, currency),
            placeholder=label("no_line_items", lang),
        ),
        DrawTotalsBlock(
            rows=(
                TotalsRow(label("subtotal", lang), format_currency(summary.taxable_amount, lang, currency)),
                TotalsRow(vat_label, format_currency(summary.total_tax, lang, currency)),
                TotalsRow(label("grand_total", lang), format_currency(summary.grand_total, lang, currency), emphasized=True),
            )
        ),
        DrawNote(label("invoice_note", lang)),
        DrawFooterPass(
            generated_label=label("generated", lang),
            generated_at=format_datetime(generated_at or datetime.now(), lang),
            page_label=label("page", lang),
        ),
    ]


def invoice_file_stem(invoice: Invoice, language: str) -> str:
    return invoice.invoice_number or "invoice"
