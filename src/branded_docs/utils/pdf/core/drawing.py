"""
PDF content-stream operators. Coordinates here are native PDF space
(origin bottom-left); `surface.PageSurface` does the top-down conversion.
"""

from __future__ import annotations

from branded_docs.core.calculations.color_math import RGB, rgb_to_pdf
from branded_docs.utils.pdf.core.fonts import normalize_ascii

# Bezier control distance for quarter circles
_KAPPA = 0.5523


def _num(value: float) -> str:
    text = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def escape_pdf_text(text: str) -> str:
    ascii_text = normalize_ascii(text)
    return ascii_text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def fill_color(color: RGB) -> str:
    return f"{rgb_to_pdf(color)} rg\n"


def stroke_color(color: RGB) -> str:
    return f"{rgb_to_pdf(color)} RG\n"


def line_width(width: float) -> str:
    return f"{_num(width)} w\n"


def _paint_op(fill: bool, stroke: bool) -> str:
    if fill and stroke:
        return "B"
    if fill:
        return "f"
    return "S"


def draw_rect(x: float, y: float, w: float, h: float, fill: bool = True, stroke: bool = False) -> str:
    return f"{_num(x)} {_num(y)} {_num(w)} {_num(h)} re {_paint_op(fill, stroke)}\n"


def draw_rounded_rect(x: float, y: float, w: float, h: float, r: float, fill: bool = True, stroke: bool = False) -> str:
    r = max(0.0, min(r, w / 2.0, h / 2.0))
    if r == 0:
        return draw_rect(x, y, w, h, fill=fill, stroke=stroke)
    k = r * _KAPPA
    x2, y2 = x + w, y + h
    parts = [
        f"{_num(x + r)} {_num(y)} m",
        f"{_num(x2 - r)} {_num(y)} l",
        f"{_num(x2 - r + k)} {_num(y)} {_num(x2)} {_num(y + r - k)} {_num(x2)} {_num(y + r)} c",
        f"{_num(x2)} {_num(y2 - r)} l",
        f"{_num(x2)} {_num(y2 - r + k)} {_num(x2 - r + k)} {_num(y2)} {_num(x2 - r)} {_num(y2)} c",
        f"{_num(x + r)} {_num(y2)} l",
        f"{_num(x + r - k)} {_num(y2)} {_num(x)} {_num(y2 - r + k)} {_num(x)} {_num(y2 - r)} c",
        f"{_num(x)} {_num(y + r)} l",
        f"{_num(x)} {_num(y + r - k)} {_num(x + r - k)} {_num(y)} {_num(x + r)} {_num(y)} c",
        f"h {_paint_op(fill, stroke)}",
    ]
    return "\n".join(parts) + "\n"


def draw_line(x1: float, y1: float, x2: float, y2: float) -> str:
    return f"{_num(x1)} {_num(y1)} m {_num(x2)} {_num(y2)} l S\n"


def draw_text_literal(font: str, size: float, x: float, y: float, text: str) -> str:
    return f"BT {font} {_num(size)} Tf {_num(x)} {_num(y)} Td ({escape_pdf_text(text)}) Tj ET\n"


def draw_text_glyphs(font: str, size: float, x: float, y: float, gids: list[int]) -> str:
    hex_text = "".join(f"{gid:04X}" for gid in gids)
    return f"BT {font} {_num(size)} Tf {_num(x)} {_num(y)} Td <{hex_text}> Tj ET\n"


def draw_image(name: str, x: float, y: float, w: float, h: float) -> str:
    return f"q {_num(w)} 0 0 {_num(h)} {_num(x)} {_num(y)} cm /{name} Do Q\n"
