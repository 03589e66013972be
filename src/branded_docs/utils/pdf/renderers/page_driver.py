"""
Executes composed draw operations on a `PdfDocument`.

Two states: LAYING_OUT (pages are opened on demand and the header band is
redrawn once per new page) and FINALIZING (the footer pass runs over the
known page count). The transition happens exactly once.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, Optional

from branded_docs.core.calculations.color_math import RGB
from branded_docs.utils.pdf.core.bidi import RenderContext
from branded_docs.utils.pdf.core.layout_common import CONTENT_TOP, FOOTER_H, GRADIENT_STEPS, color
from branded_docs.utils.pdf.core.ops import (
    DrawFooterPass,
    DrawHeader,
    DrawKpiCards,
    DrawMetaCard,
    DrawNote,
    DrawPartyBoxes,
    DrawSectionTitle,
    DrawTable,
    DrawTotalsBlock,
)
from branded_docs.utils.pdf.core.surface import DrawingSurfaceError, PageSurface, PdfDocument
from branded_docs.utils.pdf.core.theme import Theme
from branded_docs.utils.pdf.sections.footer import render_footer
from branded_docs.utils.pdf.sections.frame import render_frame
from branded_docs.utils.pdf.sections.header import render_header
from branded_docs.utils.pdf.sections.kpi_cards import render_kpi_cards
from branded_docs.utils.pdf.sections.meta_card import render_meta_card
from branded_docs.utils.pdf.sections.note import render_note
from branded_docs.utils.pdf.sections.parties import render_party_boxes
from branded_docs.utils.pdf.sections.table import render_section_title, render_table
from branded_docs.utils.pdf.sections.totals import render_totals

logger = logging.getLogger(__name__)

# space kept free above the footer band
BOTTOM_GAP = 6


class DriverState(str, Enum):
    LAYING_OUT = "laying_out"
    FINALIZING = "finalizing"


SECTION_RENDERERS: Dict[type, Callable] = {
    DrawMetaCard: render_meta_card,
    DrawPartyBoxes: render_party_boxes,
    DrawKpiCards: render_kpi_cards,
    DrawSectionTitle: render_section_title,
    DrawTable: render_table,
    DrawTotalsBlock: render_totals,
    DrawNote: render_note,
}


class PageDriver:
    def __init__(self, document: PdfDocument, theme: Theme, ctx: RenderContext, gradient_steps: int = GRADIENT_STEPS):
        self.document = document
        self.theme = theme
        self.ctx = ctx
        self.gradient_steps = max(2, int(gradient_steps))
        self.state = DriverState.LAYING_OUT
        self.header: Optional[DrawHeader] = None
        self.header_draws = 0

    @property
    def page(self) -> PageSurface:
        return self.document.current_page

    @property
    def bottom(self) -> float:
        return self.ctx.page_height - FOOTER_H - BOTTOM_GAP

    # -------- pagination --------
    def start_page(self) -> PageSurface:
        if self.state is not DriverState.LAYING_OUT:
            raise DrawingSurfaceError("Cannot add pages while finalizing")
        page = self.document.add_page()
        self.ctx.page_number = page.number
        self.ctx.cursor_y = CONTENT_TOP
        if self.header is not None:
            render_header(self, self.header, first_page=page.number == 1)
            self.header_draws += 1
        else:
            render_frame(self)
        return page

    def ensure_space(self, height: float) -> bool:
        """Open a new page when `height` does not fit; True if a break happened."""
        if self.ctx.cursor_y + height <= self.bottom:
            return False
        if self.ctx.cursor_y <= CONTENT_TOP:
            # already at the top of a fresh page; taller blocks overflow
            return False
        self.start_page()
        return True

    def advance(self, height: float) -> None:
        self.ctx.cursor_y += height

    # -------- text helpers --------
    def measure(self, text: str, size: float, bold: bool = False) -> float:
        return self.document.text_width(self.ctx.shape(text), size, bold)

    def text(
        self,
        text,
        x: float,
        y: float,
        size: float = 10,
        bold: bool = False,
        color_: RGB | None = None,
        align: str = "left",
        page: PageSurface | None = None,
    ) -> float:
        target = page or self.page
        return target.text(self.ctx.shape(text), x, y, size=size, bold=bold, color=color_ or color("ink"), align=align)

    def fit_text(self, text, size: float, max_width: float, bold: bool = False) -> str:
        """Trim `text` with an ellipsis until it fits `max_width`."""
        value = "" if text is None else str(text)
        if max_width <= 0:
            return ""
        if self.measure(value, size, bold) <= max_width:
            return value
        while value and self.measure(value + "...", size, bold) > max_width:
            value = value[:-1]
        return value.rstrip() + "..." if value else ""

    # -------- execution --------
    def run(self, ops: Iterable) -> PdfDocument:
        if self.state is not DriverState.LAYING_OUT or self.document.pages:
            raise DrawingSurfaceError("Page driver can run only once")
        footer: Optional[DrawFooterPass] = None
        for op in ops:
            if isinstance(op, DrawHeader):
                self.header = op
                if not self.document.pages:
                    self.start_page()
                continue
            if isinstance(op, DrawFooterPass):
                footer = op
                continue
            renderer = SECTION_RENDERERS.get(type(op))
            if renderer is None:
                raise DrawingSurfaceError(f"No renderer for {type(op).__name__}")
            if not self.document.pages:
                self.start_page()
            renderer(self, op)
        if not self.document.pages:
            self.start_page()

        self.state = DriverState.FINALIZING
        if footer is not None:
            render_footer(self, footer)
        logger.debug("Laid out %d page(s)", self.document.page_count)
        return self.document
