from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from branded_docs.utils.pdf.core.layout_common import (
    CONTENT_TOP,
    SECTION_GAP,
    TABLE_CELL_PAD,
    TABLE_FONT_SIZE,
    TABLE_LEADING,
    color,
)
from branded_docs.utils.pdf.core.ops import DrawSectionTitle, DrawTable, TableRow
from branded_docs.utils.pdf.core.table_layout import PlacedColumn, cell_align, compute_column_widths, place_columns, wrap_text

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver

HEAD_H = TABLE_LEADING + 2 * TABLE_CELL_PAD + 2
TITLE_SIZE = 12


def _anchor(column: PlacedColumn, align: str) -> float:
    if align == "right":
        return column.x + column.width - TABLE_CELL_PAD
    if align == "center":
        return column.x + column.width / 2.0
    return column.x + TABLE_CELL_PAD


def _baseline(top: float, line: int) -> float:
    return top + TABLE_CELL_PAD + TABLE_FONT_SIZE - 1 + line * TABLE_LEADING


def _render_head(driver: "PageDriver", columns: Sequence[PlacedColumn]) -> None:
    ctx, theme = driver.ctx, driver.theme
    top = ctx.cursor_y
    driver.page.rect(ctx.place_box(0, ctx.content_width), top, ctx.content_width, HEAD_H, fill=theme.table_head_fill_color)
    for column in columns:
        align = cell_align(column.spec, ctx)
        text = driver.fit_text(column.spec.header, TABLE_FONT_SIZE, column.width - 2 * TABLE_CELL_PAD, bold=True)
        driver.text(text, _anchor(column, align), _baseline(top, 0) + 1, size=TABLE_FONT_SIZE, bold=True, color_=theme.table_head_text_color, align=align)
    driver.advance(HEAD_H)


def _row_lines(driver: "PageDriver", row: TableRow, columns: Sequence[PlacedColumn]) -> List[List[str]]:
    if row.placeholder:
        return [[row.cells[0] if row.cells else ""]]
    lines = []
    for column, cell in zip(columns, row.cells):
        max_w = column.width - 2 * TABLE_CELL_PAD
        lines.append(wrap_text(cell, max_w, lambda s: driver.measure(s, TABLE_FONT_SIZE)))
    return lines


def _render_row_slice(
    driver: "PageDriver",
    row: TableRow,
    columns: Sequence[PlacedColumn],
    cell_lines: List[List[str]],
    start: int,
    count: int,
    shaded: bool,
) -> None:
    """Lines `start..start+count` of one row as a single band on the current page."""
    ctx, theme = driver.ctx, driver.theme
    page = driver.page
    row_x = ctx.place_box(0, ctx.content_width)
    top = ctx.cursor_y
    height = count * TABLE_LEADING + 2 * TABLE_CELL_PAD
    if shaded:
        page.rect(row_x, top, ctx.content_width, height, fill=theme.alternate_row_color)
    page.line(row_x, top + height, row_x + ctx.content_width, top + height, theme.border_color, width=0.5)

    if row.placeholder:
        center = row_x + ctx.content_width / 2.0
        driver.text(cell_lines[0][0], center, _baseline(top, 0), size=TABLE_FONT_SIZE, color_=color("faint"), align="center")
    else:
        for column, lines in zip(columns, cell_lines):
            align = cell_align(column.spec, ctx)
            for number, line in enumerate(lines[start : start + count]):
                driver.text(line, _anchor(column, align), _baseline(top, number), size=TABLE_FONT_SIZE, color_=color("ink"), align=align)
    driver.advance(height)


def render_table(driver: "PageDriver", op: DrawTable) -> None:
    """
    Head plus wrapped rows. A row that does not fit opens a new page and the
    head is repeated there; a row taller than a whole page is split line by
    line across pages. Empty tables get a single placeholder row.
    """
    ctx = driver.ctx
    widths = compute_column_widths(op.columns, ctx.content_width)
    columns = place_columns(op.columns, widths, ctx)
    page_room = driver.bottom - CONTENT_TOP - HEAD_H

    driver.ensure_space(HEAD_H + TABLE_LEADING + 2 * TABLE_CELL_PAD)
    _render_head(driver, columns)

    for index, row in enumerate(op.body_rows):
        cell_lines = _row_lines(driver, row, columns)
        total = max((len(lines) for lines in cell_lines), default=1)
        fits_fresh_page = total * TABLE_LEADING + 2 * TABLE_CELL_PAD <= page_room
        start = 0
        while start < total:
            count = total - start
            if ctx.cursor_y + count * TABLE_LEADING + 2 * TABLE_CELL_PAD > driver.bottom:
                fit = int((driver.bottom - ctx.cursor_y - 2 * TABLE_CELL_PAD) // TABLE_LEADING)
                if fit < 1 or (start == 0 and fits_fresh_page):
                    driver.start_page()
                    _render_head(driver, columns)
                    continue
                count = fit
            _render_row_slice(driver, row, columns, cell_lines, start, count, shaded=index % 2 == 1)
            start += count
    driver.advance(12)


def render_section_title(driver: "PageDriver", op: DrawSectionTitle) -> None:
    ctx = driver.ctx
    if ctx.cursor_y > CONTENT_TOP:
        driver.advance(SECTION_GAP - 12)
    # keep the title together with the table head and its first row
    driver.ensure_space(TITLE_SIZE + 8 + HEAD_H + TABLE_LEADING + 2 * TABLE_CELL_PAD)
    driver.text(op.text, ctx.leading_x(), ctx.cursor_y + TITLE_SIZE, size=TITLE_SIZE, bold=True, color_=color("ink"), align=ctx.align)
    driver.advance(TITLE_SIZE + 8)
