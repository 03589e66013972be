from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from branded_docs.core.calculations.color_math import BLACK, RGB, WHITE, mix_color, parse_hex_color

DEFAULT_PRIMARY = "#2563EB"
DEFAULT_SECONDARY = "#D946EF"

PALETTE_STOPS = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 950)

# Stop -> (target, weight). Fixed table; stop 500 is the base itself.
_MIX_WEIGHTS: dict[int, tuple[RGB, float]] = {
    50: (WHITE, 0.92),
    100: (WHITE, 0.84),
    200: (WHITE, 0.70),
    300: (WHITE, 0.52),
    400: (WHITE, 0.30),
    600: (BLACK, 0.12),
    700: (BLACK, 0.28),
    800: (BLACK, 0.42),
    900: (BLACK, 0.56),
    950: (BLACK, 0.72),
}

PaletteScale = Mapping[int, RGB]


def build_scale(base: RGB) -> dict[int, RGB]:
    scale: dict[int, RGB] = {}
    for stop in PALETTE_STOPS:
        if stop == 500:
            scale[stop] = RGB(*base)
            continue
        target, weight = _MIX_WEIGHTS[stop]
        scale[stop] = mix_color(base, target, weight)
    return scale


@dataclass(frozen=True)
class BrandColors:
    primary: RGB
    secondary: RGB


def _branding_value(branding, key: str, attr: str):
    if branding is None:
        return None
    if isinstance(branding, Mapping):
        return branding.get(key)
    return getattr(branding, attr, None)


def resolve_brand_colors(branding) -> BrandColors:
    """
    Read primary/secondary from a branding mapping (camelCase API shape) or a
    `TenantBranding`, falling back to the defaults when absent or unparsable.
    """
    primary = parse_hex_color(_branding_value(branding, "primaryColor", "primary_color"))
    secondary = parse_hex_color(_branding_value(branding, "secondaryColor", "secondary_color"))
    return BrandColors(
        primary=primary or parse_hex_color(DEFAULT_PRIMARY),
        secondary=secondary or parse_hex_color(DEFAULT_SECONDARY),
    )
