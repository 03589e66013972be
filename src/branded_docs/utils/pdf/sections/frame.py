from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

from branded_docs.core.calculations.color_math import mix_color
from branded_docs.utils.pdf.core.layout_common import BAR_H, HEADER_BAND_H, SIDEBAR_ACCENT_W, THIN_BAR_H
from branded_docs.utils.pdf.core.theme import FrameStyle

if TYPE_CHECKING:
    from branded_docs.utils.pdf.renderers.page_driver import PageDriver


def _flat_bar(driver: "PageDriver") -> None:
    driver.page.rect(0, 0, driver.ctx.page_width, BAR_H, fill=driver.theme.primary)


def _gradient_bar(driver: "PageDriver") -> None:
    """Discrete steps from primary (leading edge) to secondary (trailing edge)."""
    ctx, theme = driver.ctx, driver.theme
    steps = driver.gradient_steps
    step_w = ctx.page_width / steps
    for i in range(steps):
        shade = mix_color(theme.primary, theme.secondary, i / float(steps - 1))
        # overlap by half a point so no hairline shows between steps
        w = step_w + (0.5 if i < steps - 1 else 0)
        driver.page.rect(ctx.mirror_x(i * step_w, w), 0, w, BAR_H, fill=shade)


def _sidebar(driver: "PageDriver") -> None:
    ctx, theme = driver.ctx, driver.theme
    width = ctx.sidebar_width
    if not width:
        return _flat_bar(driver)
    on_left = ctx.sidebar_side == "left"
    x = 0 if on_left else ctx.page_width - width
    driver.page.rect(x, 0, width, ctx.page_height, fill=theme.primary)
    accent_x = x + width - SIDEBAR_ACCENT_W if on_left else x
    driver.page.rect(accent_x, 0, SIDEBAR_ACCENT_W, ctx.page_height, fill=theme.secondary)


def _thin_bar(driver: "PageDriver") -> None:
    driver.page.rect(0, 0, driver.ctx.page_width, THIN_BAR_H, fill=driver.theme.primary)


def _dark_band(driver: "PageDriver") -> None:
    driver.page.rect(0, 0, driver.ctx.page_width, HEADER_BAND_H, fill=driver.theme.band_color)
    _gradient_bar(driver)


FRAME_RENDERERS: Dict[FrameStyle, Callable[["PageDriver"], None]] = {
    FrameStyle.FLAT_BAR: _flat_bar,
    FrameStyle.GRADIENT_BAR: _gradient_bar,
    FrameStyle.SIDEBAR: _sidebar,
    FrameStyle.THIN_BAR: _thin_bar,
    FrameStyle.DARK_BAND: _dark_band,
}


def render_frame(driver: "PageDriver") -> None:
    FRAME_RENDERERS[driver.theme.frame](driver)
