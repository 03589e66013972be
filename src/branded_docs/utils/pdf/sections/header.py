from __future__ import annotations

from typing import TYPE_CHECKING

from branded_docs.utils.pdf.core.images import fit_box
from branded_docs.utils.pdf.core.layout_common import LOGO_H, LOGO_PAD, LOGO_W, QR_SIZE, color
from branded_docs.utils.pdf.core.ops import DrawHeader
from branded_docs.utils.pdf.sections.frame import render_frame

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver

HEADER_TOP = 14
QR_TOP = 16
QR_GAP = 12


def render_header(driver: "PageDriver", op: DrawHeader, first_page: bool = True) -> None:
    """
    Frame, logo card and title block on the leading side; QR (first page
    only) and the document number/date block on the trailing side.
    """
    page, ctx, theme = driver.page, driver.ctx, driver.theme
    render_frame(driver)

    title_y, subtitle_y = 46, 64
    if op.logo is not None:
        box_w, box_h = LOGO_W + 2 * LOGO_PAD, LOGO_H + 2 * LOGO_PAD
        box_x = ctx.place_box(0, box_w)
        page.rounded_rect(box_x, HEADER_TOP, box_w, box_h, 10, fill=color("white"), stroke=color("border"))
        img_w, img_h = fit_box(op.logo, LOGO_W, LOGO_H)
        page.image(op.logo, box_x + (box_w - img_w) / 2, HEADER_TOP + (box_h - img_h) / 2, img_w, img_h)
        title_y, subtitle_y = HEADER_TOP + box_h + 18, HEADER_TOP + box_h + 34

    trailing_inset = 0
    if first_page and op.qr is not None:
        qr_x = ctx.place_trailing_box(0, QR_SIZE)
        page.rect(qr_x - 3, QR_TOP - 3, QR_SIZE + 6, QR_SIZE + 6, fill=color("white"))
        page.image(op.qr, qr_x, QR_TOP, QR_SIZE, QR_SIZE)
        trailing_inset = QR_SIZE + QR_GAP

    anchor = ctx.trailing_x(trailing_inset)
    block_w = 0.0
    if op.number:
        driver.text(op.number_label, anchor, 30, size=8, color_=theme.header_muted_color, align=ctx.opposite_align)
        block_w = driver.text(op.number, anchor, 46, size=13, bold=True, color_=theme.header_title_color, align=ctx.opposite_align)
    if op.date:
        driver.text(op.date_label, anchor, 62, size=8, color_=theme.header_muted_color, align=ctx.opposite_align)
        block_w = max(block_w, driver.text(op.date, anchor, 77, size=10, color_=theme.header_title_color, align=ctx.opposite_align))

    # the title block may use whatever the trailing block leaves free
    title_room = ctx.content_width - trailing_inset - block_w - QR_GAP
    lead = ctx.leading_x()
    title = driver.fit_text(op.title, 16, title_room, bold=True)
    driver.text(title, lead, title_y, size=16, bold=True, color_=theme.header_title_color, align=ctx.align)
    if op.subtitle:
        subtitle = driver.fit_text(op.subtitle, 10, title_room)
        driver.text(subtitle, lead, subtitle_y, size=10, color_=theme.header_muted_color, align=ctx.align)
