from __future__ import annotations

from typing import TYPE_CHECKING

from branded_docs.utils.pdf.core.layout_common import BOX_GAP, CARD_PAD, CARD_RADIUS, PARTY_BOX_H, color
from branded_docs.utils.pdf.core.ops import DrawPartyBoxes, PartyBox

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver


def _render_box(driver: "PageDriver", box: PartyBox, x: float, y: float, w: float) -> None:
    ctx, theme, page = driver.ctx, driver.theme, driver.page
    page.rounded_rect(x, y, w, PARTY_BOX_H, CARD_RADIUS, fill=color("white"), stroke=theme.border_color)
    anchor = ctx.box_leading_x(x, w, CARD_PAD)
    inner_w = w - 2 * CARD_PAD
    driver.text(box.title, anchor, y + 18, size=8, color_=color("muted"), align=ctx.align)
    page.line(x + CARD_PAD, y + 25, x + w - CARD_PAD, y + 25, theme.border_color)
    name = driver.fit_text(box.name or "-", 11, inner_w, bold=True)
    driver.text(name, anchor, y + 42, size=11, bold=True, color_=theme.accent_color, align=ctx.align)
    line_y = y + 58
    if box.vat_number:
        vat = driver.fit_text(f"{box.vat_label}: {box.vat_number}", 9, inner_w)
        driver.text(vat, anchor, line_y, size=9, color_=color("ink"), align=ctx.align)
        line_y += 14
    if box.address:
        address = driver.fit_text(box.address, 9, inner_w)
        driver.text(address, anchor, line_y, size=9, color_=color("muted"), align=ctx.align)


def render_party_boxes(driver: "PageDriver", op: DrawPartyBoxes) -> None:
    """Seller on the leading side, next to the logo; buyer/supplier on the trailing side."""
    ctx = driver.ctx
    driver.ensure_space(PARTY_BOX_H)
    width = (ctx.content_width - BOX_GAP) / 2.0
    top = ctx.cursor_y
    _render_box(driver, op.seller, ctx.place_box(0, width), top, width)
    _render_box(driver, op.buyer, ctx.place_box(width + BOX_GAP, width), top, width)
    driver.advance(PARTY_BOX_H + BOX_GAP + 4)
