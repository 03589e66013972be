"""
Draw operations produced by the document composers.

Every op carries resolved content (already formatted and labelled text);
geometry that depends on the running cursor is worked out by the section
renderers when the page driver executes the op.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from branded_docs.core.calculations.color_math import RGB
from branded_docs.utils.pdf.core.images import PdfImage
from branded_docs.utils.pdf.core.table_layout import ColumnSpec


@dataclass(frozen=True)
class DrawHeader:
    """Header band; redrawn on every page, the QR only on the first."""

    title: str
    subtitle: str = ""
    number_label: str = ""
    number: str = ""
    date_label: str = ""
    date: str = ""
    logo: Optional[PdfImage] = None
    qr: Optional[PdfImage] = None


@dataclass(frozen=True)
class MetaPair:
    label: str
    value: str


@dataclass(frozen=True)
class DrawMetaCard:
    pairs: Tuple[MetaPair, ...]
    progress: Optional[float] = None  # 0..100, draws a progress bar under the pairs

    @property
    def rows(self) -> Tuple[Tuple[MetaPair, ...], ...]:
        """Pairs two at a time; an odd last row has a single entry."""
        return tuple(tuple(self.pairs[i : i + 2]) for i in range(0, len(self.pairs), 2))


@dataclass(frozen=True)
class PartyBox:
    title: str
    name: str
    vat_label: str = ""
    vat_number: str = ""
    address: str = ""


@dataclass(frozen=True)
class DrawPartyBoxes:
    seller: PartyBox
    buyer: PartyBox


@dataclass(frozen=True)
class KpiCard:
    title: str
    value: str
    subtitle: str = ""
    value_color: RGB = RGB(15, 23, 42)


@dataclass(frozen=True)
class DrawKpiCards:
    cards: Tuple[KpiCard, ...]


@dataclass(frozen=True)
class DrawSectionTitle:
    text: str


@dataclass(frozen=True)
class TableRow:
    cells: Tuple[str, ...]
    placeholder: bool = False


@dataclass(frozen=True)
class DrawTable:
    columns: Tuple[ColumnSpec, ...]
    rows: Tuple[TableRow, ...] = ()
    placeholder: str = ""

    @property
    def body_rows(self) -> Tuple[TableRow, ...]:
        if self.rows:
            return self.rows
        return (TableRow(cells=(self.placeholder,), placeholder=True),)


@dataclass(frozen=True)
class TotalsRow:
    label: str
    value: str
    emphasized: bool = False


@dataclass(frozen=True)
class DrawTotalsBlock:
    rows: Tuple[TotalsRow, ...]


@dataclass(frozen=True)
class DrawNote:
    text: str


@dataclass(frozen=True)
class DrawFooterPass:
    generated_label: str
    generated_at: str
    page_label: str


@dataclass(frozen=True)
class DocumentAssets:
    logo: Optional[PdfImage] = None
    qr: Optional[PdfImage] = None

