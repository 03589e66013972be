from __future__ import annotations

from typing import TYPE_CHECKING

from branded_docs.utils.pdf.core.layout_common import FOOTER_H, color
from branded_docs.utils.pdf.core.ops import DrawFooterPass

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver

FOOTER_SIZE = 8


def page_indicator(op: DrawFooterPass, number: int, total: int) -> str:
    return f"{op.page_label} {number} / {total}"


def render_footer(driver: "PageDriver", op: DrawFooterPass) -> None:
    """Stamp every page once the total is known: timestamp leading, page number trailing."""
    ctx = driver.ctx
    pages = driver.document.pages
    total = len(pages)
    generated = f"{op.generated_label}: {op.generated_at}" if op.generated_at else ""
    rule_y = ctx.page_height - FOOTER_H + 10
    baseline = ctx.page_height - 20
    left = ctx.place_box(0, ctx.content_width)
    for page in pages:
        page.line(left, rule_y, left + ctx.content_width, rule_y, color("border"), width=0.5)
        if generated:
            driver.text(generated, ctx.leading_x(), baseline, size=FOOTER_SIZE, color_=color("faint"), align=ctx.align, page=page)
        driver.text(
            page_indicator(op, page.number, total),
            ctx.trailing_x(),
            baseline,
            size=FOOTER_SIZE,
            color_=color("faint"),
            align=ctx.opposite_align,
            page=page,
        )
