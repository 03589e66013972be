"""
Page-oriented drawing surface in top-down coordinates.

Layout code measures y downward from the top edge of the page; every call
here converts to PDF space (pdf_y = page_height - y) before emitting
operators.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Set

from branded_docs.core.calculations.color_math import RGB
from branded_docs.utils.pdf.core import drawing
from branded_docs.utils.pdf.core.bidi import has_arabic
from branded_docs.utils.pdf.core.builder import build_pdf_bytes
from branded_docs.utils.pdf.core.fonts import (
    BASE_BOLD,
    BASE_REGULAR,
    EMBEDDED_BOLD,
    EMBEDDED_REGULAR,
    FontBundle,
    TrueTypeFont,
    base_text_width,
)
from branded_docs.utils.pdf.core.images import PdfImage


class DrawingSurfaceError(RuntimeError):
    """Invalid use of the drawing surface; a programming defect, never a data condition."""


def _check_finite(*values: float) -> None:
    for value in values:
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise DrawingSurfaceError(f"Invalid coordinate: {value!r}")


def _check_size(w: float, h: float) -> None:
    _check_finite(w, h)
    if w < 0 or h < 0:
        raise DrawingSurfaceError(f"Negative size: {w!r} x {h!r}")


class PageSurface:
    def __init__(self, document: "PdfDocument", number: int):
        self.document = document
        self.number = number
        self._ops: List[str] = []

    @property
    def width(self) -> float:
        return self.document.width

    @property
    def height(self) -> float:
        return self.document.height

    def content(self) -> str:
        return "".join(self._ops)

    def _y(self, y: float) -> float:
        return self.height - y

    # -------- shapes --------
    def rect(self, x: float, y: float, w: float, h: float, fill: RGB | None = None, stroke: RGB | None = None, width: float = 0.8) -> None:
        _check_finite(x, y)
        _check_size(w, h)
        if fill is None and stroke is None:
            return
        self._ops.append(self._paint_state(fill, stroke, width))
        self._ops.append(drawing.draw_rect(x, self._y(y + h), w, h, fill=fill is not None, stroke=stroke is not None))

    def rounded_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        radius: float,
        fill: RGB | None = None,
        stroke: RGB | None = None,
        width: float = 0.8,
    ) -> None:
        _check_finite(x, y, radius)
        _check_size(w, h)
        if fill is None and stroke is None:
            return
        self._ops.append(self._paint_state(fill, stroke, width))
        self._ops.append(
            drawing.draw_rounded_rect(x, self._y(y + h), w, h, radius, fill=fill is not None, stroke=stroke is not None)
        )

    def line(self, x1: float, y1: float, x2: float, y2: float, color: RGB, width: float = 0.6) -> None:
        _check_finite(x1, y1, x2, y2, width)
        self._ops.append(drawing.stroke_color(color) + drawing.line_width(width))
        self._ops.append(drawing.draw_line(x1, self._y(y1), x2, self._y(y2)))

    @staticmethod
    def _paint_state(fill: RGB | None, stroke: RGB | None, width: float) -> str:
        parts = []
        if fill is not None:
            parts.append(drawing.fill_color(fill))
        if stroke is not None:
            parts.append(drawing.stroke_color(stroke))
            parts.append(drawing.line_width(width))
        return "".join(parts)

    # -------- text --------
    def text_width(self, text: str, size: float, bold: bool = False) -> float:
        return self.document.text_width(text, size, bold)

    def text(
        self,
        text: str,
        x: float,
        y: float,
        size: float = 10,
        bold: bool = False,
        color: RGB = RGB(0, 0, 0),
        align: str = "left",
    ) -> float:
        """Draw one line with its baseline at `y`; `x` is the anchor for `align`."""
        _check_finite(x, y, size)
        value = "" if text is None else str(text)
        if not value:
            return 0.0
        width = self.text_width(value, size, bold)
        if align == "right":
            x -= width
        elif align == "center":
            x -= width / 2.0
        self._ops.append(drawing.fill_color(color))
        self._ops.append(self.document.encode_text(value, x, self._y(y), size, bold))
        return width

    # -------- images --------
    def image(self, image: PdfImage, x: float, y: float, w: float, h: float) -> None:
        _check_finite(x, y)
        _check_size(w, h)
        name = self.document.register_image(image)
        self._ops.append(drawing.draw_image(name, x, self._y(y + h), w, h))


class PdfDocument:
    """A multi-page document; `to_bytes()` may be called exactly once."""

    def __init__(self, width: float, height: float, fonts: Optional[FontBundle] = None):
        _check_size(width, height)
        self.width = width
        self.height = height
        self.fonts = fonts
        self.pages: List[PageSurface] = []
        self.images: Dict[str, PdfImage] = {}
        self._image_names: Dict[str, str] = {}
        # glyph ids drawn with each embedded font, per document
        self.used_glyphs: Dict[str, Set[int]] = {EMBEDDED_REGULAR: set(), EMBEDDED_BOLD: set()}
        self.finalized = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> PageSurface:
        if not self.pages:
            raise DrawingSurfaceError("No page has been added")
        return self.pages[-1]

    def add_page(self) -> PageSurface:
        if self.finalized:
            raise DrawingSurfaceError("Document already finalized")
        page = PageSurface(self, len(self.pages) + 1)
        self.pages.append(page)
        return page

    def embedded_font(self, bold: bool) -> TrueTypeFont | None:
        if self.fonts is None:
            return None
        return self.fonts.bold if bold else self.fonts.regular

    def _uses_embedded(self, text: str) -> bool:
        return self.fonts is not None and has_arabic(text)

    def text_width(self, text: str, size: float, bold: bool = False) -> float:
        value = "" if text is None else str(text)
        if self._uses_embedded(value):
            return self.embedded_font(bold).text_width(value, size)
        return base_text_width(value, BASE_BOLD if bold else BASE_REGULAR, size)

    def encode_text(self, text: str, x: float, pdf_y: float, size: float, bold: bool) -> str:
        if self._uses_embedded(text):
            name = EMBEDDED_BOLD if bold else EMBEDDED_REGULAR
            gids = self.embedded_font(bold).glyph_ids(text)
            self.used_glyphs[name].update(gids)
            return drawing.draw_text_glyphs(name, size, x, pdf_y, gids)
        return drawing.draw_text_literal(BASE_BOLD if bold else BASE_REGULAR, size, x, pdf_y, text)

    def register_image(self, image: PdfImage) -> str:
        name = self._image_names.get(image.key)
        if name is None:
            name = f"Im{len(self._image_names) + 1}"
            self._image_names[image.key] = name
            self.images[name] = image
        return name

    def to_bytes(self) -> bytes:
        if self.finalized:
            raise DrawingSurfaceError("Document already finalized")
        if not self.pages:
            raise DrawingSurfaceError("Document has no pages")
        self.finalized = True
        return build_pdf_bytes(self)
