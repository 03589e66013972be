import pytest

from branded_docs.core.calculations.color_math import RGB, parse_hex_color, relative_luminance
from branded_docs.core.calculations.palette import PALETTE_STOPS, build_scale, resolve_brand_colors
from branded_docs.core.models.branding import TenantBranding

BASES = ["#2563EB", "#D946EF", "#0D4F3C", "#808080", "#F59E0B"]


@pytest.mark.parametrize("hex_value", BASES)
def test_stop_500_is_the_base(hex_value):
    base = parse_hex_color(hex_value)
    assert build_scale(base)[500] == base


@pytest.mark.parametrize("hex_value", BASES)
def test_luminance_strictly_decreases_across_stops(hex_value):
    scale = build_scale(parse_hex_color(hex_value))
    values = [relative_luminance(scale[stop]) for stop in PALETTE_STOPS]
    assert all(a > b for a, b in zip(values, values[1:]))


def test_scale_uses_fixed_weights():
    scale = build_scale(RGB(37, 99, 235))
    assert list(scale) == list(PALETTE_STOPS)
    assert scale[50] == RGB(238, 243, 253)
    assert scale[950] == RGB(10, 28, 66)


def test_build_scale_is_deterministic():
    base = RGB(12, 34, 56)
    assert build_scale(base) == build_scale(base)


def test_resolve_brand_colors_defaults_and_overrides():
    defaults = resolve_brand_colors(None)
    assert defaults.primary == RGB(37, 99, 235)
    assert defaults.secondary == RGB(217, 70, 239)

    mapped = resolve_brand_colors({"primaryColor": "#000", "secondaryColor": "not-a-color"})
    assert mapped.primary == RGB(0, 0, 0)
    assert mapped.secondary == defaults.secondary

    typed = resolve_brand_colors(TenantBranding(primary_color="#0D4F3C"))
    assert typed.primary == RGB(13, 79, 60)
