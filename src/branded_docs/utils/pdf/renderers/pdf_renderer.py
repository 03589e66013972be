"""
Entry point: `render(kind, record, language, branding)` turns one business
record and a tenant brand into PDF bytes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from branded_docs.core.calculations.palette import resolve_brand_colors
from branded_docs.core.models.branding import coerce_branding
from branded_docs.core.models.documents import RECORD_TYPES, coerce_record
from branded_docs.core.services.labels import normalize_language
from branded_docs.core.services.settings import RenderSettings, load_render_settings
from branded_docs.utils.filenames import pdf_file_name
from branded_docs.utils.pdf.composers.business_report import compose_business_report, report_file_stem
from branded_docs.utils.pdf.composers.invoice import compose_invoice, invoice_file_stem
from branded_docs.utils.pdf.composers.project_progress import compose_project_progress, project_file_stem
from branded_docs.utils.pdf.core.bidi import build_render_context, load_shaper
from branded_docs.utils.pdf.core.fonts import FontProvider, get_font_provider
from branded_docs.utils.pdf.core.images import load_data_uri_image
from branded_docs.utils.pdf.core.ops import DocumentAssets
from branded_docs.utils.pdf.core.surface import PdfDocument
from branded_docs.utils.pdf.core.theme import select_theme
from branded_docs.utils.pdf.renderers.page_driver import PageDriver
from branded_docs.utils.qr import zatca_qr_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedDocument:
    filename: str
    data: bytes
    page_count: int


@dataclass(frozen=True)
class _DocumentKind:
    compose: Callable
    file_stem: Callable
    fallback_name: str
    with_qr: bool = False


DOCUMENT_KINDS: Dict[str, _DocumentKind] = {
    "invoice": _DocumentKind(compose_invoice, invoice_file_stem, "invoice", with_qr=True),
    "report": _DocumentKind(compose_business_report, report_file_stem, "business_report"),
    "project": _DocumentKind(compose_project_progress, project_file_stem, "project_progress"),
}


def _check_kind(kind: str) -> _DocumentKind:
    document_kind = DOCUMENT_KINDS.get(kind)
    if document_kind is None or kind not in RECORD_TYPES:
        raise ValueError(f"Unknown document kind: {kind!r}")
    return document_kind


def render(
    kind: str,
    record,
    language: str = "en",
    branding=None,
    *,
    font_provider: Optional[FontProvider] = None,
    now: Optional[datetime] = None,
    settings: Optional[RenderSettings] = None,
) -> Optional[RenderedDocument]:
    """
    Render one document. A missing record is a no-op (returns None); asset
    problems (fonts, images) degrade the output; drawing-surface errors raise.
    """
    if record is None:
        logger.debug("No %s record supplied; nothing to render", kind)
        return None
    document_kind = _check_kind(kind)
    settings = settings or load_render_settings()
    lang = normalize_language(language)

    document_record = coerce_record(kind, record)
    brand = coerce_branding(branding)
    colors = resolve_brand_colors(brand)
    theme = select_theme(brand.invoice_pdf_template, colors.primary, colors.secondary)

    fonts = None
    shaper = None
    if lang == "ar":
        provider = font_provider or get_font_provider(settings)
        fonts = provider.load()
        shaper = load_shaper()
    ctx = build_render_context(lang, theme, font_active=fonts is not None, shaper=shaper)
    if lang == "ar" and not ctx.shaping_active:
        logger.info("Arabic shaping inactive (font loaded: %s)", ctx.font_active)

    assets = DocumentAssets(
        logo=load_data_uri_image(brand.logo) if brand.logo else None,
        qr=zatca_qr_image(getattr(document_record, "zatca", None)) if document_kind.with_qr else None,
    )
    ops = document_kind.compose(
        document_record,
        theme,
        ctx,
        assets,
        generated_at=now,
        default_currency=settings.default_currency,
    )

    document = PdfDocument(ctx.page_width, ctx.page_height, fonts=fonts if ctx.font_active else None)
    PageDriver(document, theme, ctx, gradient_steps=settings.gradient_steps).run(ops)
    data = document.to_bytes()
    filename = pdf_file_name(document_kind.file_stem(document_record, lang), document_kind.fallback_name)
    logger.info("Rendered %s %s (%d page(s), template %d, %s)", kind, filename, document.page_count, theme.template_id, lang)
    return RenderedDocument(filename=filename, data=data, page_count=document.page_count)


async def render_async(
    kind: str,
    record,
    language: str = "en",
    branding=None,
    *,
    font_provider: Optional[FontProvider] = None,
    now: Optional[datetime] = None,
    settings: Optional[RenderSettings] = None,
) -> Optional[RenderedDocument]:
    """Await the one-time font fetch off the event loop, then render synchronously."""
    if record is None:
        return None
    settings = settings or load_render_settings()
    provider = font_provider
    if normalize_language(language) == "ar":
        provider = font_provider or get_font_provider(settings)
        await provider.ensure()
    return render(kind, record, language, branding, font_provider=provider, now=now, settings=settings)

