from __future__ import annotations

import asyncio
import logging
import struct
import threading
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

import requests

logger = logging.getLogger(__name__)

REGULAR_FILE = "NotoNaskhArabic-Regular.ttf"
BOLD_FILE = "NotoNaskhArabic-Bold.ttf"

# Resource names used in page content streams
BASE_REGULAR = "/F1"
BASE_BOLD = "/F2"
EMBEDDED_REGULAR = "/F3"
EMBEDDED_BOLD = "/F4"

# Built-in Type1 advance widths (1/1000 em) for printable ASCII 32..126
_HELVETICA = (
    "278 278 355 556 556 889 667 191 333 333 389 584 278 333 278 278 556 556 556 556 556 556 556 556 556 556 "
    "278 278 584 584 584 556 1015 667 667 722 722 667 611 778 722 278 500 667 556 833 722 778 667 778 722 667 "
    "611 722 667 944 667 667 611 278 278 278 469 556 333 556 556 500 556 556 278 556 556 222 222 500 222 833 "
    "556 556 556 556 333 500 278 556 500 722 500 500 500 334 260 334 584"
)
_HELVETICA_BOLD = (
    "278 333 474 556 556 889 722 238 333 333 389 584 278 333 278 278 556 556 556 556 556 556 556 556 556 556 "
    "333 333 584 584 584 611 975 722 722 722 722 667 611 778 722 278 556 722 611 833 722 778 667 778 722 667 "
    "611 722 667 944 667 667 611 333 278 333 584 556 333 556 611 556 611 556 333 611 611 278 278 556 278 889 "
    "611 611 611 611 389 556 333 611 556 778 556 556 500 389 280 389 584"
)
BASE_WIDTHS = {
    BASE_REGULAR: [int(w) for w in _HELVETICA.split()],
    BASE_BOLD: [int(w) for w in _HELVETICA_BOLD.split()],
}


def normalize_ascii(text: str) -> str:
    """Remove diacritics to stay compatible with built-in PDF Type1 fonts."""
    normalized = unicodedata.normalize("NFKD", str(text))
    return normalized.encode("ascii", "ignore").decode("ascii")


def base_text_width(text: str, font: str, size: float) -> float:
    widths = BASE_WIDTHS.get(font, BASE_WIDTHS[BASE_REGULAR])
    total = 0
    for ch in normalize_ascii(text):
        code = ord(ch)
        total += widths[code - 32] if 32 <= code <= 126 else 500
    return total * size / 1000.0


@dataclass(frozen=True)
class _TtfTables:
    cmap: tuple[int, int]
    head: tuple[int, int]
    hhea: tuple[int, int]
    hmtx: tuple[int, int]
    maxp: tuple[int, int]


class TrueTypeFont:
    def __init__(self, data: bytes, pdf_name: str):
        self.pdf_name = pdf_name  # Name object, e.g. "/ArabicRegular"
        self.data = bytes(data)
        self.tables = self._parse_tables(self.data)

        head_offset, _ = self.tables.head
        self.units_per_em = struct.unpack_from(">H", self.data, head_offset + 18)[0]
        x_min, y_min, x_max, y_max = struct.unpack_from(">hhhh", self.data, head_offset + 36)
        self.bbox = (x_min, y_min, x_max, y_max)

        hhea_offset, _ = self.tables.hhea
        self.ascent, self.descent = struct.unpack_from(">hh", self.data, hhea_offset + 4)
        self.number_of_hmetrics = struct.unpack_from(">H", self.data, hhea_offset + 34)[0]

        maxp_offset, _ = self.tables.maxp
        self.num_glyphs = struct.unpack_from(">H", self.data, maxp_offset + 4)[0]

        self._advance_widths = self._load_advance_widths()
        self._cmap_lookup = self._build_cmap_lookup()

    @classmethod
    def from_path(cls, path: Path, pdf_name: str) -> "TrueTypeFont":
        return cls(Path(path).read_bytes(), pdf_name)

    @staticmethod
    def _parse_tables(data: bytes) -> _TtfTables:
        if len(data) < 12:
            raise ValueError("Invalid TTF (too small)")
        num_tables = struct.unpack_from(">H", data, 4)[0]
        directory_offset = 12
        entries: dict[str, tuple[int, int]] = {}
        for i in range(num_tables):
            base = directory_offset + i * 16
            tag = data[base : base + 4].decode("ascii", "replace")
            offset = struct.unpack_from(">I", data, base + 8)[0]
            length = struct.unpack_from(">I", data, base + 12)[0]
            entries[tag] = (offset, length)

        required = ["cmap", "head", "hhea", "hmtx", "maxp"]
        missing = [t for t in required if t not in entries]
        if missing:
            raise ValueError(f"TTF missing tables: {', '.join(missing)}")
        return _TtfTables(
            cmap=entries["cmap"],
            head=entries["head"],
            hhea=entries["hhea"],
            hmtx=entries["hmtx"],
            maxp=entries["maxp"],
        )

    def _load_advance_widths(self) -> list[int]:
        hmtx_offset, _ = self.tables.hmtx
        widths: list[int] = []
        count = min(self.number_of_hmetrics, self.num_glyphs)
        for i in range(count):
            adv = struct.unpack_from(">H", self.data, hmtx_offset + i * 4)[0]
            widths.append(int(adv))
        if not widths:
            widths = [int(self.units_per_em)]
        if len(widths) < self.num_glyphs:
            widths.extend([widths[-1]] * (self.num_glyphs - len(widths)))
        return widths

    def width_1000(self, gid: int) -> int:
        if gid < 0 or gid >= len(self._advance_widths):
            return 500
        adv = self._advance_widths[gid]
        return max(0, int(round((adv * 1000.0) / float(self.units_per_em or 1000))))

    def glyph_id(self, codepoint: int) -> int:
        gid = self._cmap_lookup(codepoint)
        if gid is None:
            return 0
        if gid < 0 or gid >= self.num_glyphs:
            return 0
        return int(gid)

    def glyph_ids(self, text: str) -> list[int]:
        return [self.glyph_id(ord(ch)) for ch in str(text)]

    def text_width(self, text: str, size: float) -> float:
        return sum(self.width_1000(gid) for gid in self.glyph_ids(text)) * size / 1000.0

    def _build_cmap_lookup(self) -> Callable[[int], int | None]:
        cmap_offset, _ = self.tables.cmap
        version, num_tables = struct.unpack_from(">HH", self.data, cmap_offset)
        if version != 0 or num_tables <= 0:
            raise ValueError("Invalid cmap table")

        records = []
        for i in range(num_tables):
            base = cmap_offset + 4 + i * 8
            platform_id, encoding_id, sub_offset = struct.unpack_from(">HHI", self.data, base)
            records.append((platform_id, encoding_id, sub_offset))

        preferred = [
            (3, 10),  # Windows, Unicode full repertoire (format 12)
            (3, 1),  # Windows, Unicode BMP (format 4)
            (0, 4),  # Unicode platform
            (0, 3),
        ]
        chosen = None
        for pid, eid in preferred:
            match = next((r for r in records if r[0] == pid and r[1] == eid), None)
            if match:
                chosen = match
                break
        if not chosen:
            chosen = records[0]

        _, _, sub_offset = chosen
        subtable_start = cmap_offset + sub_offset
        fmt = struct.unpack_from(">H", self.data, subtable_start)[0]
        if fmt == 4:
            return self._parse_cmap_format4(subtable_start)
        if fmt == 12:
            return self._parse_cmap_format12(subtable_start)
        raise ValueError(f"Unsupported cmap format: {fmt}")

    def _parse_cmap_format4(self, start: int) -> Callable[[int], int | None]:
        seg_count = struct.unpack_from(">H", self.data, start + 6)[0] // 2
        end_codes_offset = start + 14
        end_codes = struct.unpack_from(f">{seg_count}H", self.data, end_codes_offset)
        start_codes_offset = end_codes_offset + 2 * seg_count + 2
        start_codes = struct.unpack_from(f">{seg_count}H", self.data, start_codes_offset)
        id_delta_offset = start_codes_offset + 2 * seg_count
        id_deltas = struct.unpack_from(f">{seg_count}h", self.data, id_delta_offset)
        id_range_offset_offset = id_delta_offset + 2 * seg_count
        id_range_offsets = struct.unpack_from(f">{seg_count}H", self.data, id_range_offset_offset)

        def lookup(codepoint: int) -> int | None:
            if codepoint < 0 or codepoint > 0xFFFF:
                return None
            for i in range(seg_count):
                if start_codes[i] <= codepoint <= end_codes[i]:
                    ro = id_range_offsets[i]
                    if ro == 0:
                        return (codepoint + id_deltas[i]) & 0xFFFF
                    addr = id_range_offset_offset + 2 * i + ro + 2 * (codepoint - start_codes[i])
                    if addr + 2 > len(self.data):
                        return None
                    glyph_index = struct.unpack_from(">H", self.data, addr)[0]
                    if glyph_index == 0:
                        return 0
                    return (glyph_index + id_deltas[i]) & 0xFFFF
            return None

        return lookup

    def _parse_cmap_format12(self, start: int) -> Callable[[int], int | None]:
        n_groups = struct.unpack_from(">I", self.data, start + 12)[0]
        groups = [struct.unpack_from(">III", self.data, start + 16 + i * 12) for i in range(n_groups)]

        def lookup(codepoint: int) -> int | None:
            for start_char, end_char, start_gid in groups:
                if start_char <= codepoint <= end_char:
                    return int(start_gid + (codepoint - start_char))
            return None

        return lookup


@dataclass(frozen=True)
class FontBundle:
    regular: TrueTypeFont
    bold: TrueTypeFont


class FontProvider:
    """
    Lazily fetched Arabic font pair, memoised for the process lifetime.

    The first `load()` decides: either a `FontBundle` or "unavailable".
    Later calls (and concurrent ones) get the cached result.
    """

    def __init__(self, base_url: str = "", font_dir: str = "", timeout: float = 10.0, session: requests.Session | None = None):
        self.base_url = base_url or ""
        self.font_dir = font_dir or ""
        self.timeout = timeout
        self.session = session
        self._lock = threading.Lock()
        self._resolved = False
        self._bundle: FontBundle | None = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def bundle(self) -> FontBundle | None:
        return self._bundle

    def load(self) -> FontBundle | None:
        if self._resolved:
            return self._bundle
        with self._lock:
            if not self._resolved:
                self._bundle = self._load_bundle()
                self._resolved = True
        return self._bundle

    async def ensure(self) -> FontBundle | None:
        if self._resolved:
            return self._bundle
        return await asyncio.to_thread(self.load)

    def _load_bundle(self) -> FontBundle | None:
        if not self.base_url and not self.font_dir:
            logger.info("No Arabic font source configured; using built-in fonts")
            return None
        regular = self._load_font(REGULAR_FILE, "/ArabicRegular")
        if regular is None:
            logger.warning("Arabic font unavailable; Arabic documents use built-in fonts")
            return None
        bold = self._load_font(BOLD_FILE, "/ArabicBold") or regular
        return FontBundle(regular=regular, bold=bold)

    def _load_font(self, filename: str, pdf_name: str) -> TrueTypeFont | None:
        data = self._fetch(filename)
        if not data:
            return None
        try:
            return TrueTypeFont(data, pdf_name=pdf_name)
        except (ValueError, struct.error, IndexError) as exc:
            logger.warning("Invalid font file %s: %s", filename, exc)
            return None

    def _fetch(self, filename: str) -> bytes | None:
        if self.font_dir:
            path = Path(self.font_dir) / filename
            try:
                return path.read_bytes()
            except OSError as exc:
                logger.warning("Cannot read font %s: %s", path, exc)
                if not self.base_url:
                    return None
        url = f"{self.base_url.rstrip('/')}/{filename}"
        getter = self.session.get if self.session is not None else requests.get
        try:
            response = getter(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Font fetch failed for %s: %s", url, exc)
            return None
        return response.content


_PROVIDER: FontProvider | None = None
_PROVIDER_LOCK = threading.Lock()


def get_font_provider(settings=None) -> FontProvider:
    """Process-wide provider built from the render settings on first use."""
    global _PROVIDER
    if _PROVIDER is None:
        with _PROVIDER_LOCK:
            if _PROVIDER is None:
                if settings is None:
                    from branded_docs.core.services.settings import load_render_settings

                    settings = load_render_settings()
                _PROVIDER = FontProvider(
                    base_url=settings.font_base_url,
                    font_dir=settings.font_dir,
                    timeout=settings.font_timeout,
                )
    return _PROVIDER


def set_font_provider(provider: FontProvider | None) -> FontProvider | None:
    global _PROVIDER
    _PROVIDER = provider
    return _PROVIDER


# -------- PDF font objects --------
def _scale_font_units(value: int, units_per_em: int) -> int:
    if units_per_em <= 0:
        return int(value)
    return int(round(value * 1000.0 / float(units_per_em)))


def _format_cid_widths(font: TrueTypeFont, used_gids: Iterable[int]) -> str:
    gids = sorted(set(used_gids))
    if not gids:
        return ""
    parts: list[str] = []
    i = 0
    while i < len(gids):
        start = gids[i]
        widths = [font.width_1000(start)]
        j = i + 1
        while j < len(gids) and gids[j] == gids[j - 1] + 1:
            widths.append(font.width_1000(gids[j]))
            j += 1
        parts.append(f"{start} [{' '.join(str(w) for w in widths)}]")
        i = j
    return " ".join(parts)


def build_base_font_obj(obj_id: int, base_font: str) -> bytes:
    return f"{obj_id} 0 obj << /Type /Font /Subtype /Type1 /BaseFont /{base_font} /Encoding /WinAnsiEncoding >> endobj\n".encode("ascii")


def build_embedded_font_objs(font: TrueTypeFont, used_gids: Iterable[int], first_id: int) -> tuple[list[bytes], int, int]:
    """
    Return (objects, type0_font_id, next_free_id) for a CIDFontType2 composite
    font with Identity-H encoding, so glyph ids go straight into text strings.
    """
    file_id, desc_id, cid_id, type0_id = first_id, first_id + 1, first_id + 2, first_id + 3
    units = int(font.units_per_em or 1000)
    x_min, y_min, x_max, y_max = (_scale_font_units(v, units) for v in font.bbox)
    ascent = _scale_font_units(int(font.ascent), units)
    descent = _scale_font_units(int(font.descent), units)
    gids = set(used_gids)
    gids.add(font.glyph_id(ord(" ")))
    dw = font.width_1000(font.glyph_id(ord(" "))) or 500
    widths = _format_cid_widths(font, gids)
    w_part = f" /W [{widths}]" if widths else ""

    objs = [
        f"{file_id} 0 obj << /Length {len(font.data)} /Length1 {len(font.data)} >> stream\n".encode("ascii")
        + font.data
        + b"\nendstream endobj\n",
        (
            f"{desc_id} 0 obj << /Type /FontDescriptor /FontName {font.pdf_name} "
            f"/Flags 32 /FontBBox [{x_min} {y_min} {x_max} {y_max}] "
            f"/ItalicAngle 0 /Ascent {ascent} /Descent {descent} /CapHeight {ascent} "
            f"/StemV 80 /FontFile2 {file_id} 0 R >> endobj\n"
        ).encode("ascii"),
        (
            f"{cid_id} 0 obj << /Type /Font /Subtype /CIDFontType2 /BaseFont {font.pdf_name} "
            f"/CIDSystemInfo << /Registry (Adobe) /Ordering (Identity) /Supplement 0 >> "
            f"/FontDescriptor {desc_id} 0 R /DW {dw}{w_part} /CIDToGIDMap /Identity >> endobj\n"
        ).encode("ascii"),
        (
            f"{type0_id} 0 obj << /Type /Font /Subtype /Type0 /BaseFont {font.pdf_name} "
            f"/Encoding /Identity-H /DescendantFonts [{cid_id} 0 R] >> endobj\n"
        ).encode("ascii"),
    ]
    return objs, type0_id, first_id + 4
