import logging

import pytest

from branded_docs.core.calculations.color_math import RGB
from branded_docs.core.calculations.palette import build_scale
from branded_docs.ui.styles.theme import ThemeContext, apply_tenant_branding
from branded_docs.utils.pdf.core.layout_common import color
from branded_docs.utils.pdf.core.theme import FrameStyle, normalize_template_id, select_theme

PRIMARY = RGB(37, 99, 235)
SECONDARY = RGB(217, 70, 239)


@pytest.mark.parametrize(
    "template_id, frame",
    [
        (1, FrameStyle.FLAT_BAR),
        (2, FrameStyle.GRADIENT_BAR),
        (3, FrameStyle.SIDEBAR),
        (4, FrameStyle.THIN_BAR),
        (5, FrameStyle.DARK_BAND),
    ],
)
def test_each_template_has_its_frame(template_id, frame):
    theme = select_theme(template_id, PRIMARY, SECONDARY)
    assert theme.template_id == template_id
    assert theme.frame is frame


def test_only_sidebar_template_has_sidebar_width():
    widths = {tid: select_theme(tid, PRIMARY, SECONDARY).sidebar_width for tid in range(1, 6)}
    assert widths == {1: 0, 2: 0, 3: 56, 4: 0, 5: 0}


def test_baseline_table_head_is_light_tint():
    theme = select_theme(1, PRIMARY, SECONDARY)
    scale = build_scale(PRIMARY)
    assert theme.table_head_fill_color == scale[100]
    assert theme.header_title_color == color("ink")


def test_accent_template_forces_white_meta_and_rows():
    theme = select_theme(4, PRIMARY, SECONDARY)
    assert theme.table_head_fill_color == PRIMARY
    assert theme.table_head_text_color == color("white")
    assert theme.meta_fill_color == color("white")
    assert theme.alternate_row_color == color("white")


def test_dark_header_template():
    theme = select_theme(5, PRIMARY, SECONDARY)
    assert theme.has_band
    assert theme.band_color == build_scale(PRIMARY)[900]
    assert theme.header_title_color == color("white")
    assert theme.table_head_fill_color == theme.band_color
    assert theme.meta_fill_color == color("white")


@pytest.mark.parametrize("template_id", [None, 0, 6, "x", 2.5, True, -1])
def test_unknown_template_falls_back_to_plain(template_id):
    assert normalize_template_id(template_id) == 1
    assert select_theme(template_id, PRIMARY, SECONDARY).frame is FrameStyle.FLAT_BAR


def test_unknown_template_is_logged_not_raised(caplog):
    with caplog.at_level(logging.INFO):
        select_theme(42, PRIMARY, SECONDARY)
    assert "42" in caplog.text


def test_theme_resolution_is_pure():
    assert select_theme(3, PRIMARY, SECONDARY) == select_theme(3, PRIMARY, SECONDARY)
    assert select_theme("2", PRIMARY, SECONDARY) == select_theme(2, PRIMARY, SECONDARY)


def test_ui_theme_context_receives_palette_and_attributes():
    ctx = ThemeContext()
    apply_tenant_branding(ctx, {"primaryColor": "#2563EB", "headerStyle": "glass", "sidebarStyle": "neon"})
    assert ctx.get("--color-primary") == "37 99 235"
    assert ctx.get("--color-primary-500") == "37 99 235"
    assert ctx.get("--color-primary-50") == "238 243 253"
    assert ctx.get("--color-secondary") is None
    assert ctx.attributes == {"header-style": "glass", "sidebar-style": "neon"}
    assert ctx.revision == 1
    assert "--color-primary-950: 10 28 66;" in ctx.css_text()


def test_ui_theme_context_is_overwritten_on_next_change():
    ctx = ThemeContext()
    apply_tenant_branding(ctx, {"branding": {"primaryColor": "#000000"}})
    apply_tenant_branding(ctx, {"primaryColor": "#ffffff", "secondaryColor": "#D946EF"})
    assert ctx.get("--color-primary") == "255 255 255"
    assert ctx.get("--color-secondary-500") == "217 70 239"
    assert ctx.revision == 2


def test_ui_theme_ignores_empty_or_invalid_branding():
    ctx = ThemeContext()
    apply_tenant_branding(ctx, None)
    apply_tenant_branding(ctx, {"primaryColor": "nope"})
    assert ctx.properties == {}
    assert ctx.revision == 0
