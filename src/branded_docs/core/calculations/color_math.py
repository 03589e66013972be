"""
Hex parsing and linear RGB mixing shared by UI theming and PDF colors.
"""

from __future__ import annotations

import math
import string
from typing import NamedTuple

_HEX_DIGITS = set(string.hexdigits)


class RGB(NamedTuple):
    r: int
    g: int
    b: int


WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_channel(value: float) -> int:
    return int(clamp(int(value), 0, 255))


def parse_hex_color(value) -> RGB | None:
    """
    Parse `#RGB` / `#RRGGBB` (leading `#` and surrounding whitespace optional).
    Returns None instead of raising for anything else.
    """
    if not value:
        return None
    raw = str(value).strip().replace("#", "", 1)
    if not raw or any(ch not in _HEX_DIGITS for ch in raw):
        return None
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6:
        return None
    return RGB(int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mix_channel(a: float, b: float, weight: float) -> int:
    w = clamp(float(weight), 0.0, 1.0)
    return _round_half_up(a * (1 - w) + b * w)


def mix_color(color_a: RGB, color_b: RGB, weight: float) -> RGB:
    return RGB(
        mix_channel(color_a.r, color_b.r, weight),
        mix_channel(color_a.g, color_b.g, weight),
        mix_channel(color_a.b, color_b.b, weight),
    )


def rgb_to_hex(color: RGB) -> str:
    return "#" + "".join(f"{clamp_channel(c):02x}" for c in color)


def rgb_to_css(color: RGB) -> str:
    """Space separated channels, the format used by `rgb(var(--color-x))`."""
    return " ".join(str(clamp_channel(c)) for c in color)


def rgb_to_pdf(color: RGB) -> str:
    """Channels in 0-1 space for PDF `rg`/`RG` operators."""
    return " ".join(f"{clamp_channel(c) / 255:.3f}".rstrip("0").rstrip(".") or "0" for c in color)


def relative_luminance(color: RGB) -> float:
    return 0.2126 * color.r + 0.7152 * color.g + 0.0722 * color.b
