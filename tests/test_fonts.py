import asyncio
import logging

import pytest
import requests

from branded_docs.core.services.settings import RenderSettings
from branded_docs.utils.pdf.core import fonts
from branded_docs.utils.pdf.core.fonts import (
    BASE_BOLD,
    BASE_REGULAR,
    BOLD_FILE,
    REGULAR_FILE,
    FontProvider,
    TrueTypeFont,
    base_text_width,
    build_embedded_font_objs,
)


class FakeResponse:
    def __init__(self, content=b"", status=200):
        self.content = content
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        name = url.rsplit("/", 1)[-1]
        return self.responses.get(name, FakeResponse(status=404))


def test_parses_synthetic_font(font_bytes):
    font = TrueTypeFont(font_bytes, "/ArabicRegular")
    assert font.units_per_em == 1000
    assert font.glyph_id(ord(" ")) == 1
    assert font.glyph_id(0x0627) == 12
    assert font.glyph_id(0x4E2D) == 0
    assert font.width_1000(12) == 600
    assert font.text_width("ا ب", 10) == pytest.approx(18)


def test_rejects_truncated_font():
    with pytest.raises(ValueError):
        TrueTypeFont(b"\0" * 8, "/Broken")


def test_base_width_uses_helvetica_metrics():
    assert base_text_width("A", BASE_REGULAR, 10) == pytest.approx(6.67)
    assert base_text_width("A", BASE_BOLD, 10) == pytest.approx(7.22)
    # diacritics are folded to their ASCII letter
    assert base_text_width("é", BASE_REGULAR, 10) == base_text_width("e", BASE_REGULAR, 10)


def test_embedded_font_objects(font_bytes):
    font = TrueTypeFont(font_bytes, "/ArabicRegular")
    objs, type0_id, next_id = build_embedded_font_objs(font, {12, 13}, 5)
    assert (type0_id, next_id) == (8, 9)
    text = b"".join(objs)
    assert b"/CIDFontType2" in text
    assert b"/Encoding /Identity-H" in text
    assert b"/W [1 [600] 12 [600 600]]" in text


def test_provider_without_source_is_unavailable(caplog):
    provider = FontProvider()
    with caplog.at_level(logging.INFO):
        assert provider.load() is None
    assert provider.resolved
    assert "No Arabic font source" in caplog.text


def test_provider_reads_font_dir_and_reuses_regular_as_bold(font_dir):
    provider = FontProvider(font_dir=str(font_dir))
    bundle = provider.load()
    assert bundle is not None
    assert bundle.bold is bundle.regular
    assert provider.load() is bundle


def test_provider_fetches_over_http(font_bytes):
    session = FakeSession({REGULAR_FILE: FakeResponse(font_bytes), BOLD_FILE: FakeResponse(font_bytes)})
    provider = FontProvider(base_url="https://cdn.example.com/fonts/", timeout=2.5, session=session)
    bundle = provider.load()
    assert bundle is not None
    assert bundle.bold is not bundle.regular
    assert session.calls[0] == (f"https://cdn.example.com/fonts/{REGULAR_FILE}", 2.5)


def test_failed_fetch_is_memoised(caplog):
    session = FakeSession(error=requests.ConnectionError("offline"))
    provider = FontProvider(base_url="https://cdn.example.com", session=session)
    with caplog.at_level(logging.WARNING):
        assert provider.load() is None
        assert provider.load() is None
    assert len(session.calls) == 1
    assert "Font fetch failed" in caplog.text


def test_invalid_font_payload_is_unavailable():
    session = FakeSession({REGULAR_FILE: FakeResponse(b"not a font at all")})
    assert FontProvider(base_url="https://cdn.example.com", session=session).load() is None


def test_ensure_awaits_the_same_result(font_dir):
    provider = FontProvider(font_dir=str(font_dir))
    bundle = asyncio.run(provider.ensure())
    assert bundle is provider.load()


def test_process_provider_is_built_once_from_settings(font_dir):
    provider = fonts.get_font_provider(RenderSettings(font_dir=str(font_dir)))
    assert fonts.get_font_provider() is provider
    assert provider.font_dir == str(font_dir)
