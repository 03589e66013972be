from __future__ import annotations

from typing import TYPE_CHECKING

from branded_docs.core.calculations.color_math import clamp
from branded_docs.utils.pdf.core.layout_common import BOX_GAP, CARD_PAD, CARD_RADIUS, META_ROW_H, PROGRESS_BAR_H, color
from branded_docs.utils.pdf.core.ops import DrawMetaCard

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver

LABEL_SIZE = 8
VALUE_SIZE = 10


def meta_card_height(op: DrawMetaCard) -> float:
    height = 2 * CARD_PAD + len(op.rows) * META_ROW_H - 8
    if op.progress is not None:
        height += PROGRESS_BAR_H + 6
    return height


def render_meta_card(driver: "PageDriver", op: DrawMetaCard) -> None:
    ctx, theme = driver.ctx, driver.theme
    height = meta_card_height(op)
    driver.ensure_space(height)
    page = driver.page
    top = ctx.cursor_y
    width = ctx.content_width
    x = ctx.place_box(0, width)
    page.rounded_rect(x, top, width, height, CARD_RADIUS, fill=theme.meta_fill_color, stroke=theme.border_color)

    lead = ctx.box_leading_x(x, width, CARD_PAD)
    trail = ctx.box_trailing_x(x, width, CARD_PAD)
    column_w = width / 2.0 - CARD_PAD * 1.5
    y = top + CARD_PAD + 8
    for row in op.rows:
        anchors = ((lead, ctx.align), (trail, ctx.opposite_align))
        for pair, (anchor, align) in zip(row, anchors):
            driver.text(f"{pair.label}:", anchor, y, size=LABEL_SIZE, color_=color("muted"), align=align)
            value = driver.fit_text(pair.value, VALUE_SIZE, column_w, bold=True)
            driver.text(value, anchor, y + 14, size=VALUE_SIZE, bold=True, color_=color("ink"), align=align)
        y += META_ROW_H

    if op.progress is not None:
        track_w = width - 2 * CARD_PAD
        track_y = y - 6
        page.rounded_rect(x + CARD_PAD, track_y, track_w, PROGRESS_BAR_H, PROGRESS_BAR_H / 2, fill=color("border"))
        fill_w = track_w * clamp(op.progress, 0, 100) / 100.0
        if fill_w > 0:
            fill_x = ctx.box_leading_x(x, width, CARD_PAD) - fill_w if ctx.is_rtl else x + CARD_PAD
            page.rounded_rect(fill_x, track_y, fill_w, PROGRESS_BAR_H, min(PROGRESS_BAR_H / 2, fill_w / 2), fill=theme.accent_color)

    driver.advance(height + BOX_GAP + 4)
