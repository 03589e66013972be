import pytest

from branded_docs.core.calculations.color_math import RGB
from branded_docs.utils.pdf.core.bidi import build_render_context
from branded_docs.utils.pdf.core.table_layout import (
    FLEX_MIN_WIDTH,
    ColumnSpec,
    cell_align,
    compute_column_widths,
    place_columns,
    wrap_text,
)
from branded_docs.utils.pdf.core.theme import select_theme

COLUMNS = (
    ColumnSpec("idx", "#", 28, min_width=20, align="center"),
    ColumnSpec("desc", "Description", 200, min_width=80, flex=True),
    ColumnSpec("qty", "Qty", 44, min_width=30, align="center"),
    ColumnSpec("unit", "Unit", 84, min_width=50, align="end"),
    ColumnSpec("total", "Total", 92, min_width=56, align="end"),
)


def _ctx(language, template_id=1):
    theme = select_theme(template_id, RGB(37, 99, 235), RGB(217, 70, 239))
    return build_render_context(language, theme)


def test_flex_column_takes_the_remaining_width():
    widths = compute_column_widths(COLUMNS, 600)
    assert sum(widths) == pytest.approx(600)
    assert widths[1] == pytest.approx(600 - 28 - 44 - 84 - 92)


@pytest.mark.parametrize("available", [515.28, 459.28, 300, 200, 120])
def test_widths_never_exceed_available(available):
    widths = compute_column_widths(COLUMNS, available)
    assert sum(widths) <= available + 1e-6
    assert all(w > 0 for w in widths)


@pytest.mark.parametrize("available", [459.28, 360, 320])
def test_flex_column_keeps_its_floor_when_it_can(available):
    widths = compute_column_widths(COLUMNS, available)
    assert widths[1] >= FLEX_MIN_WIDTH - 1e-6
    for spec, width in zip(COLUMNS, widths):
        if not spec.flex:
            assert width >= spec.min_width - 1e-6


def test_fixed_columns_only_scale_down():
    columns = (ColumnSpec("a", "A", 100, min_width=40), ColumnSpec("b", "B", 300, min_width=40))
    assert compute_column_widths(columns, 200) == pytest.approx([50, 150])
    assert compute_column_widths(columns, 500) == pytest.approx([100, 300])


def test_no_columns():
    assert compute_column_widths((), 500) == []


def test_column_order_reverses_in_rtl():
    en = _ctx("en")
    ar = _ctx("ar")
    widths = compute_column_widths(COLUMNS, en.content_width)
    ltr = place_columns(COLUMNS, widths, en)
    rtl = place_columns(COLUMNS, widths, ar)

    assert [c.x for c in ltr] == sorted(c.x for c in ltr)
    assert [c.x for c in rtl] == sorted((c.x for c in rtl), reverse=True)
    assert ltr[0].x == pytest.approx(en.content_left)
    assert rtl[0].x + rtl[0].width == pytest.approx(ar.page_width - ar.content_right)
    for left, right in zip(ltr, rtl):
        assert right.x == pytest.approx(en.page_width - left.x - left.width)


def test_columns_stay_inside_sidebar_content_area():
    for language in ("en", "ar"):
        ctx = _ctx(language, 3)
        widths = compute_column_widths(COLUMNS, ctx.content_width)
        placed = place_columns(COLUMNS, widths, ctx)
        assert min(c.x for c in placed) >= ctx.content_left - 1e-6
        assert max(c.x + c.width for c in placed) <= ctx.page_width - ctx.content_right + 1e-6


def test_cell_alignment_follows_direction():
    en = _ctx("en")
    ar = _ctx("ar")
    assert [cell_align(c, en) for c in COLUMNS] == ["center", "left", "center", "right", "right"]
    assert [cell_align(c, ar) for c in COLUMNS] == ["center", "right", "center", "left", "left"]


def _measure(text):
    return float(len(text))


def test_wrap_text_breaks_on_words():
    assert wrap_text("alpha beta gamma", 10, _measure) == ["alpha beta", "gamma"]


def test_wrap_text_splits_long_words():
    assert wrap_text("abcdefghij", 4, _measure) == ["abcd", "efgh", "ij"]


def test_wrap_text_keeps_explicit_newlines():
    assert wrap_text("one\n\ntwo", 20, _measure) == ["one", "", "two"]


def test_wrap_text_empty():
    assert wrap_text("", 20, _measure) == [""]
    assert wrap_text(None, 20, _measure) == [""]
