from __future__ import annotations

from typing import TYPE_CHECKING

from branded_docs.utils.pdf.core.layout_common import color
from branded_docs.utils.pdf.core.ops import DrawNote
from branded_docs.utils.pdf.core.table_layout import wrap_text

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver

NOTE_SIZE = 8
NOTE_LEADING = 11


def render_note(driver: "PageDriver", op: DrawNote) -> None:
    ctx = driver.ctx
    if not op.text:
        return
    lines = wrap_text(op.text, ctx.content_width, lambda s: driver.measure(s, NOTE_SIZE))
    height = 12 + len(lines) * NOTE_LEADING
    driver.ensure_space(height)
    left = ctx.place_box(0, ctx.content_width)
    top = ctx.cursor_y + 4
    driver.page.line(left, top, left + ctx.content_width, top, color("border"), width=0.5)
    center = left + ctx.content_width / 2.0
    for index, line in enumerate(lines):
        driver.text(line, center, top + 8 + NOTE_SIZE + index * NOTE_LEADING, size=NOTE_SIZE, color_=color("faint"), align="center")
    driver.advance(height)
