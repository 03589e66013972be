"""
Direction-aware geometry shared by every drawing routine.

Layout code speaks in "leading" (where text starts) and "trailing" offsets;
`RenderContext` turns those into physical x-coordinates for LTR or RTL.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from branded_docs.core.services.labels import normalize_language
from branded_docs.utils.pdf.core.layout_common import CONTENT_TOP, MARGIN, PAGE_H, PAGE_W
from branded_docs.utils.pdf.core.theme import Theme

logger = logging.getLogger(__name__)

_ARABIC_RE = re.compile(r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]")

Shaper = Callable[[str], str]


def has_arabic(text: str) -> bool:
    return bool(_ARABIC_RE.search(text or ""))


def load_shaper() -> Optional[Shaper]:
    """
    Return a reshape-then-reorder callable, or None when the shaping
    libraries are not installed.
    """
    try:
        import arabic_reshaper
        from bidi.algorithm import get_display
    except ImportError:
        logger.info("Arabic shaping libraries unavailable; RTL text keeps logical order")
        return None

    def shape(text: str) -> str:
        if not has_arabic(text):
            return text
        return get_display(arabic_reshaper.reshape(text))

    return shape


@dataclass
class RenderContext:
    language: str
    is_rtl: bool
    align: str
    opposite_align: str
    page_width: float
    page_height: float
    margin: float
    sidebar_width: float
    sidebar_side: str | None
    content_left: float
    content_right: float
    content_width: float
    cursor_y: float = CONTENT_TOP
    page_number: int = 0
    font_active: bool = False
    shaping_active: bool = False
    shaper: Optional[Shaper] = field(default=None, repr=False, compare=False)

    @property
    def content_start(self) -> float:
        """Physical x of the leading content edge."""
        return self.page_width - self.content_right if self.is_rtl else self.content_left

    @property
    def content_end(self) -> float:
        """Physical x of the trailing content edge."""
        return self.content_left if self.is_rtl else self.page_width - self.content_right

    def place_box(self, offset: float, width: float) -> float:
        """Left x of a box `offset` points in from the leading content edge."""
        if self.is_rtl:
            return self.page_width - self.content_right - offset - width
        return self.content_left + offset

    def place_trailing_box(self, offset: float, width: float) -> float:
        """Left x of a box `offset` points in from the trailing content edge."""
        return self.place_box(self.content_width - offset - width, width)

    def leading_x(self, inset: float = 0) -> float:
        return self.content_start - inset if self.is_rtl else self.content_start + inset

    def trailing_x(self, inset: float = 0) -> float:
        return self.content_end + inset if self.is_rtl else self.content_end - inset

    def box_leading_x(self, box_x: float, box_w: float, inset: float) -> float:
        return box_x + box_w - inset if self.is_rtl else box_x + inset

    def box_trailing_x(self, box_x: float, box_w: float, inset: float) -> float:
        return box_x + inset if self.is_rtl else box_x + box_w - inset

    def mirror_x(self, x: float, width: float = 0) -> float:
        """Reflect a physical LTR x (of a span `width` wide) for RTL pages."""
        if self.is_rtl:
            return self.page_width - x - width
        return x

    def shape(self, text) -> str:
        value = "" if text is None else str(text)
        if self.shaping_active and self.shaper is not None:
            return self.shaper(value)
        return value


def build_render_context(
    language,
    theme: Theme,
    *,
    font_active: bool = False,
    shaper: Optional[Shaper] = None,
    page_width: float = PAGE_W,
    page_height: float = PAGE_H,
    margin: float = MARGIN,
) -> RenderContext:
    lang = normalize_language(language)
    is_rtl = lang == "ar"
    sidebar = float(theme.sidebar_width or 0)
    # the sidebar sits on the trailing edge: right in LTR, left in RTL
    sidebar_side = None
    if sidebar:
        sidebar_side = "left" if is_rtl else "right"
    content_left = margin + (sidebar if sidebar_side == "left" else 0)
    content_right = margin + (sidebar if sidebar_side == "right" else 0)
    font_on = bool(font_active and is_rtl)
    return RenderContext(
        language=lang,
        is_rtl=is_rtl,
        align="right" if is_rtl else "left",
        opposite_align="left" if is_rtl else "right",
        page_width=page_width,
        page_height=page_height,
        margin=margin,
        sidebar_width=sidebar,
        sidebar_side=sidebar_side,
        content_left=content_left,
        content_right=content_right,
        content_width=page_width - content_left - content_right,
        font_active=font_on,
        shaping_active=bool(font_on and shaper is not None),
        shaper=shaper,
    )
