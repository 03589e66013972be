"""
Table geometry: column width fitting, direction-aware column placement and
cell text wrapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence

from branded_docs.utils.pdf.core.bidi import RenderContext

FLEX_MIN_WIDTH = 80


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    header: str
    width: float
    min_width: float = 36
    align: str = "start"  # "start" | "end" | "center", relative to reading direction
    flex: bool = False


@dataclass(frozen=True)
class PlacedColumn:
    spec: ColumnSpec
    x: float
    width: float


def _shrink(widths: List[float], floors: List[float], excess: float) -> List[float]:
    """Take `excess` away from columns in proportion to their room above the floor."""
    room = [max(0.0, w - f) for w, f in zip(widths, floors)]
    total_room = sum(room)
    if total_room <= 0 or excess <= 0:
        return widths
    take = min(excess, total_room)
    return [w - take * r / total_room for w, r in zip(widths, room)]


def compute_column_widths(columns: Sequence[ColumnSpec], available: float) -> List[float]:
    """
    Fit base widths into `available`.

    Fixed columns scale down proportionally (never below their minimum) when
    the base table is too wide; the flex column takes whatever is left and is
    kept at or above its own minimum. The sum never exceeds `available`.
    """
    if not columns:
        return []
    available = max(0.0, float(available))
    base = [float(c.width) for c in columns]
    total = sum(base)
    flex_idx = next((i for i, c in enumerate(columns) if c.flex), None)

    if total > available and total > 0:
        scale = available / total
        widths = [max(float(c.min_width), w * scale) if i != flex_idx else w * scale for i, (c, w) in enumerate(zip(columns, base))]
    else:
        widths = list(base)

    if flex_idx is not None:
        flex_min = max(float(columns[flex_idx].min_width), FLEX_MIN_WIDTH)
        fixed_total = sum(w for i, w in enumerate(widths) if i != flex_idx)
        remaining = available - fixed_total
        if remaining < flex_min:
            # squeeze fixed columns toward their floors to keep the flex column readable
            idx = [i for i in range(len(widths)) if i != flex_idx]
            squeezed = _shrink([widths[i] for i in idx], [float(columns[i].min_width) for i in idx], flex_min - remaining)
            for i, w in zip(idx, squeezed):
                widths[i] = w
            fixed_total = sum(widths[i] for i in idx)
            remaining = available - fixed_total
        widths[flex_idx] = max(remaining, min(flex_min, available))

    total = sum(widths)
    if total > available and total > 0:
        # floors alone do not fit: scale everything
        scale = available / total
        widths = [w * scale for w in widths]
    return widths


def place_columns(columns: Sequence[ColumnSpec], widths: Sequence[float], ctx: RenderContext, offset: float = 0) -> List[PlacedColumn]:
    """Columns in reading order; the first column sits at the leading content edge."""
    placed: List[PlacedColumn] = []
    cursor = offset
    for spec, width in zip(columns, widths):
        placed.append(PlacedColumn(spec=spec, x=ctx.place_box(cursor, width), width=width))
        cursor += width
    return placed


def cell_align(spec: ColumnSpec, ctx: RenderContext) -> str:
    if spec.align == "center":
        return "center"
    if spec.align == "end":
        return ctx.opposite_align
    return ctx.align


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """Greedy word wrap; words wider than the cell are split by character."""
    value = "" if text is None else str(text)
    lines: List[str] = []
    for paragraph in value.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
                current = ""
            if measure(word) <= max_width:
                current = word
                continue
            piece = ""
            for ch in word:
                if piece and measure(piece + ch) > max_width:
                    lines.append(piece)
                    piece = ch
                else:
                    piece += ch
            current = piece
        if current:
            lines.append(current)
    return lines or [""]
