import base64
import io
import struct
import sys
from pathlib import Path

import pytest

# Ensure `src` is importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FONT_CODEPOINTS = [0x20] + list(range(0x30, 0x3A)) + [0x0627, 0x0628, 0x0644, 0x0645, 0xFE8D, 0xFEDF]


def build_test_font(codepoints=FONT_CODEPOINTS, advance=600) -> bytes:
    """
    Smallest TrueType file the font parser accepts: head, hhea, maxp, hmtx and
    a format-4 cmap mapping each codepoint to its own glyph (gid = index + 1).
    """
    num_glyphs = len(codepoints) + 1
    head = struct.pack(">IIIIHHqqhhhhHHhhh", 0x10000, 0x10000, 0, 0x5F0F3CF5, 0, 1000, 0, 0, 0, -250, 1000, 900, 0, 8, 2, 0, 0)
    hhea = struct.pack(">I" + "hhh" + "H" + "h" * 6 + "h" * 4 + "h" + "H", 0x10000, 900, -250, 0, advance, 0, 0, advance, 1, 0, 0, 0, 0, 0, 0, 0, num_glyphs)
    maxp = struct.pack(">IH", 0x5000, num_glyphs)
    hmtx = b"".join(struct.pack(">Hh", advance, 0) for _ in range(num_glyphs))

    segments = [(cp, cp, gid) for gid, cp in enumerate(codepoints, start=1)] + [(0xFFFF, 0xFFFF, 0)]
    seg_count = len(segments)
    deltas = []
    for start, _end, gid in segments:
        delta = (gid - start) & 0xFFFF if gid else 1
        deltas.append(delta - 0x10000 if delta >= 0x8000 else delta)
    body = struct.pack(f">{seg_count}H", *[s[1] for s in segments])
    body += struct.pack(">H", 0)
    body += struct.pack(f">{seg_count}H", *[s[0] for s in segments])
    body += struct.pack(f">{seg_count}h", *deltas)
    body += struct.pack(f">{seg_count}H", *([0] * seg_count))
    subtable = struct.pack(">HHHHHHH", 4, 14 + len(body), 0, seg_count * 2, 0, 0, 0) + body
    cmap = struct.pack(">HH", 0, 1) + struct.pack(">HHI", 3, 1, 12) + subtable

    tables = [(b"cmap", cmap), (b"head", head), (b"hhea", hhea), (b"hmtx", hmtx), (b"maxp", maxp)]
    offset = 12 + 16 * len(tables)
    directory = b""
    data = b""
    for tag, blob in tables:
        directory += tag + struct.pack(">III", 0, offset + len(data), len(blob))
        data += blob + b"\0" * (-len(blob) % 4)
    return struct.pack(">IHHHH", 0x10000, len(tables), 0, 0, 0) + directory + data


@pytest.fixture
def font_bytes():
    return build_test_font()


@pytest.fixture
def font_dir(tmp_path, font_bytes):
    from branded_docs.utils.pdf.core.fonts import REGULAR_FILE

    directory = tmp_path / "fonts"
    directory.mkdir()
    (directory / REGULAR_FILE).write_bytes(font_bytes)
    return directory


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """No ambient settings file, env overrides or cached font provider leak into tests."""
    from branded_docs.utils.pdf.core import fonts

    monkeypatch.setenv("BRANDED_DOCS_SETTINGS", str(tmp_path / "missing-settings.json"))
    for name in ("BRANDED_DOCS_FONT_URL", "BRANDED_DOCS_FONT_DIR", "BRANDED_DOCS_FONT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    fonts.set_font_provider(None)
    yield
    fonts.set_font_provider(None)


@pytest.fixture
def png_data_uri():
    from PIL import Image

    img = Image.new("RGBA", (8, 4), (37, 99, 235, 255))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def sample_invoice():
    return {
        "invoiceNumber": "INV-2024/001",
        "issueDate": "2024-03-05T10:30:00Z",
        "transactionType": "B2B",
        "flow": "sell",
        "currency": "SAR",
        "seller": {"name": "Acme Trading", "nameAr": "أكمي", "vatNumber": "300000000000003", "address": {"city": "Riyadh", "district": "Olaya"}},
        "buyer": {"name": "Globex", "address": {"city": "Jeddah"}},
        "lineItems": [{"productName": "Consulting", "quantity": 2, "unitPrice": 50, "taxRate": 15}],
    }


@pytest.fixture
def sample_report():
    return {
        "period": {"startDate": "2024-01-01", "endDate": "2024-03-31"},
        "currency": "SAR",
        "totals": {
            "sales": {"grandTotal": 11500, "invoiceCount": 4},
            "purchases": {"grandTotal": 2300, "invoiceCount": 2},
            "expenses": {"totalAmount": 1200, "expenseCount": 3},
            "net": -500,
        },
        "breakdown": {
            "salesByTransactionType": [{"_id": "B2B", "invoiceCount": 3, "revenue": 10000, "tax": 1500}],
            "topCustomers": [{"_id": "Globex", "invoiceCount": 2, "revenue": 8000}],
            "expensesByCategory": [],
        },
    }


@pytest.fixture
def sample_project():
    return {
        "code": "PRJ-7",
        "nameEn": "Warehouse fit-out",
        "nameAr": "تجهيز المستودع",
        "status": "active",
        "ownerName": "Sara",
        "dueDate": "2024-06-30",
        "progress": 40,
        "budget": 250000,
        "progressUpdates": [
            {"createdAt": "2024-02-01T08:00:00Z", "progress": 10, "note": "Kickoff", "createdBy": {"firstName": "Omar"}},
            {"createdAt": "2024-04-01T08:00:00Z", "progress": 40, "note": "Racks installed", "createdBy": {"email": "pm@example.com"}},
            {"createdAt": "2024-03-01T08:00:00Z", "progress": 25, "note": "Flooring"},
        ],
    }
