"""
Fixed layout constants for every generated document (A4 portrait, points).
These are not configuration.
"""

from branded_docs.core.calculations.color_math import RGB

# Page geometry
PAGE_W, PAGE_H = 595.28, 841.89
MARGIN = 40
FOOTER_H = 44
HEADER_BAND_H = 98
CONTENT_TOP = 106

# Frames
BAR_H = 6
THIN_BAR_H = 2
SIDEBAR_W = 56
SIDEBAR_ACCENT_W = 4
GRADIENT_STEPS = 24

# Header band
LOGO_W, LOGO_H = 92, 28
LOGO_PAD = 6
QR_SIZE = 66

# Cards and boxes
CARD_RADIUS = 12
CARD_PAD = 14
META_ROW_H = 34
PARTY_BOX_H = 86
BOX_GAP = 12
KPI_CARD_H = 74
PROGRESS_BAR_H = 8

# Tables
TABLE_FONT_SIZE = 9
TABLE_CELL_PAD = 6
TABLE_LEADING = 11
TOTALS_W = 240
TOTALS_ROW_H = 24
SECTION_GAP = 22

# Colors
COLORS = {
    "ink": RGB(15, 23, 42),
    "muted": RGB(100, 116, 139),
    "faint": RGB(148, 163, 184),
    "border": RGB(226, 232, 240),
    "row_alt": RGB(248, 250, 252),
    "white": RGB(255, 255, 255),
    "band_muted": RGB(226, 232, 240),
    "positive": RGB(22, 163, 74),
    "purchases": RGB(37, 99, 235),
    "expenses": RGB(234, 88, 12),
    "negative": RGB(220, 38, 38),
}


def color(name: str) -> RGB:
    return COLORS.get(name, RGB(0, 0, 0))
