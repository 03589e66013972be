from __future__ import annotations

from typing import TYPE_CHECKING

from branded_docs.utils.pdf.core.layout_common import BOX_GAP, CARD_PAD, TOTALS_ROW_H, TOTALS_W, color
from branded_docs.utils.pdf.core.ops import DrawTotalsBlock

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver


def render_totals(driver: "PageDriver", op: DrawTotalsBlock) -> None:
    """Key/value block on the trailing side, right below wherever the table ended."""
    ctx, theme = driver.ctx, driver.theme
    if not op.rows:
        return
    width = min(TOTALS_W, ctx.content_width)
    height = len(op.rows) * TOTALS_ROW_H
    driver.ensure_space(height)
    page = driver.page
    top = ctx.cursor_y
    x = ctx.place_trailing_box(0, width)
    page.rounded_rect(x, top, width, height, 8, fill=color("white"), stroke=theme.border_color)

    lead = ctx.box_leading_x(x, width, CARD_PAD)
    trail = ctx.box_trailing_x(x, width, CARD_PAD)
    for index, row in enumerate(op.rows):
        y = top + index * TOTALS_ROW_H
        if index:
            page.line(x + 8, y, x + width - 8, y, theme.border_color, width=0.5 if not row.emphasized else 1.2)
        size = 11 if row.emphasized else 9
        baseline = y + TOTALS_ROW_H / 2.0 + size / 2.8
        label_color = color("ink") if row.emphasized else color("muted")
        value_color = theme.accent_color if row.emphasized else color("ink")
        driver.text(row.label, lead, baseline, size=size, bold=row.emphasized, color_=label_color, align=ctx.align)
        driver.text(row.value, trail, baseline, size=size, bold=row.emphasized, color_=value_color, align=ctx.opposite_align)
    driver.advance(height + BOX_GAP)
