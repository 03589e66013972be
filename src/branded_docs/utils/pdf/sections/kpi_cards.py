from __future__ import annotations

from typing import TYPE_CHECKING

from branded_docs.utils.pdf.core.layout_common import BOX_GAP, CARD_PAD, CARD_RADIUS, KPI_CARD_H, color
from branded_docs.utils.pdf.core.ops import DrawKpiCards

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver

COLUMNS = 2
ACCENT_W = 4


def render_kpi_cards(driver: "PageDriver", op: DrawKpiCards) -> None:
    """Cards in a 2-column grid; the first card of each row sits on the leading side."""
    ctx, theme = driver.ctx, driver.theme
    if not op.cards:
        return
    rows = (len(op.cards) + COLUMNS - 1) // COLUMNS
    height = rows * KPI_CARD_H + (rows - 1) * BOX_GAP
    driver.ensure_space(height)
    page = driver.page
    card_w = (ctx.content_width - BOX_GAP * (COLUMNS - 1)) / float(COLUMNS)
    top = ctx.cursor_y
    for index, card in enumerate(op.cards):
        col, row = index % COLUMNS, index // COLUMNS
        x = ctx.place_box(col * (card_w + BOX_GAP), card_w)
        y = top + row * (KPI_CARD_H + BOX_GAP)
        page.rounded_rect(x, y, card_w, KPI_CARD_H, CARD_RADIUS, fill=color("white"), stroke=theme.border_color)
        accent_x = x + card_w - ACCENT_W - 8 if ctx.is_rtl else x + 8
        page.rect(accent_x, y + 14, ACCENT_W, KPI_CARD_H - 28, fill=card.value_color)
        anchor = ctx.box_leading_x(x, card_w, CARD_PAD + 8)
        inner_w = card_w - 2 * CARD_PAD - 8
        driver.text(card.title, anchor, y + 22, size=10, color_=color("muted"), align=ctx.align)
        if card.subtitle:
            subtitle = driver.fit_text(card.subtitle, 8, inner_w)
            driver.text(subtitle, anchor, y + 36, size=8, color_=color("faint"), align=ctx.align)
        value = driver.fit_text(card.value, 14, inner_w, bold=True)
        driver.text(value, anchor, y + 60, size=14, bold=True, color_=card.value_color, align=ctx.align)
    driver.advance(height + BOX_GAP + 6)
