"""
Template skins for generated documents.

`select_theme` is a lookup table: one builder per template id plus the
template-1 default. Drawing code never branches on the numeric id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict

from branded_docs.core.calculations.color_math import RGB
from branded_docs.core.calculations.palette import build_scale
from branded_docs.utils.pdf.core.layout_common import SIDEBAR_W, color

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = 1


class FrameStyle(str, Enum):
    FLAT_BAR = "flat_bar"
    GRADIENT_BAR = "gradient_bar"
    SIDEBAR = "sidebar"
    THIN_BAR = "thin_bar"
    DARK_BAND = "dark_band"


@dataclass(frozen=True)
class Theme:
    template_id: int
    frame: FrameStyle
    primary: RGB
    secondary: RGB
    sidebar_width: float
    band_color: RGB | None
    header_title_color: RGB
    header_muted_color: RGB
    meta_fill_color: RGB
    table_head_fill_color: RGB
    table_head_text_color: RGB
    alternate_row_color: RGB
    accent_color: RGB
    border_color: RGB

    @property
    def has_band(self) -> bool:
        return self.band_color is not None


def _base_theme(template_id: int, frame: FrameStyle, primary: RGB, secondary: RGB) -> dict:
    scale = build_scale(primary)
    return {
        "template_id": template_id,
        "frame": frame,
        "primary": RGB(*primary),
        "secondary": RGB(*secondary),
        "sidebar_width": 0,
        "band_color": None,
        "header_title_color": color("ink"),
        "header_muted_color": color("muted"),
        "meta_fill_color": scale[50],
        "table_head_fill_color": scale[100],
        "table_head_text_color": scale[800],
        "alternate_row_color": color("row_alt"),
        "accent_color": RGB(*primary),
        "border_color": color("border"),
    }


def _plain(primary: RGB, secondary: RGB) -> dict:
    return _base_theme(1, FrameStyle.FLAT_BAR, primary, secondary)


def _gradient(primary: RGB, secondary: RGB) -> dict:
    return _base_theme(2, FrameStyle.GRADIENT_BAR, primary, secondary)


def _sidebar(primary: RGB, secondary: RGB) -> dict:
    values = _base_theme(3, FrameStyle.SIDEBAR, primary, secondary)
    values["sidebar_width"] = SIDEBAR_W
    return values


def _accent(primary: RGB, secondary: RGB) -> dict:
    values = _base_theme(4, FrameStyle.THIN_BAR, primary, secondary)
    values["table_head_fill_color"] = RGB(*primary)
    values["table_head_text_color"] = color("white")
    values["meta_fill_color"] = color("white")
    values["alternate_row_color"] = color("white")
    return values


def _dark_header(primary: RGB, secondary: RGB) -> dict:
    values = _base_theme(5, FrameStyle.DARK_BAND, primary, secondary)
    band = build_scale(primary)[900]
    values["band_color"] = band
    values["header_title_color"] = color("white")
    values["header_muted_color"] = color("band_muted")
    values["table_head_fill_color"] = band
    values["table_head_text_color"] = color("white")
    values["meta_fill_color"] = color("white")
    return values


TEMPLATES: Dict[int, Callable[[RGB, RGB], dict]] = {
    1: _plain,
    2: _gradient,
    3: _sidebar,
    4: _accent,
    5: _dark_header,
}


def normalize_template_id(template_id) -> int:
    value = None
    if not isinstance(template_id, bool) and not (isinstance(template_id, float) and not template_id.is_integer()):
        try:
            value = int(template_id)
        except (TypeError, ValueError):
            value = None
    if value not in TEMPLATES:
        if template_id is not None:
            logger.info("Unknown document template %r, using template %d", template_id, DEFAULT_TEMPLATE)
        return DEFAULT_TEMPLATE
    return value


def select_theme(template_id, primary: RGB, secondary: RGB) -> Theme:
    builder = TEMPLATES[normalize_template_id(template_id)]
    return Theme(**builder(primary, secondary))
