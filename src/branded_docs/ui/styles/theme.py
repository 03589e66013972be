"""
Live UI theming: tenant brand colors expanded into `--color-*` custom properties.

The store is an explicit object handed to whatever renders the UI. It is
(re)written on every branding change and never torn down.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from branded_docs.core.calculations.color_math import parse_hex_color, rgb_to_css
from branded_docs.core.calculations.palette import build_scale
from branded_docs.core.models.branding import coerce_branding


@dataclass
class ThemeContext:
    properties: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, str] = field(default_factory=dict)
    revision: int = 0

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.properties.get(name, default)

    def css_text(self, selector: str = ":root") -> str:
        body = "".join(f"  {name}: {value};\n" for name, value in sorted(self.properties.items()))
        return f"{selector} {{\n{body}}}\n"


def apply_palette(context: ThemeContext, prefix: str, hex_color) -> bool:
    base = parse_hex_color(hex_color)
    if base is None:
        return False
    scale = build_scale(base)
    context.properties[f"--color-{prefix}"] = rgb_to_css(scale[500])
    for stop, rgb in scale.items():
        context.properties[f"--color-{prefix}-{stop}"] = rgb_to_css(rgb)
    return True


def apply_tenant_branding(context: ThemeContext, branding) -> ThemeContext:
    if not branding:
        return context
    brand = coerce_branding(branding)
    changed = False
    if brand.primary_color:
        changed |= apply_palette(context, "primary", brand.primary_color)
    if brand.secondary_color:
        changed |= apply_palette(context, "secondary", brand.secondary_color)
    if brand.header_style:
        context.attributes["header-style"] = brand.header_style
        changed = True
    if brand.sidebar_style:
        context.attributes["sidebar-style"] = brand.sidebar_style
        changed = True
    if changed:
        context.revision += 1
    return context
