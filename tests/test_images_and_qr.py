import base64
import builtins
import io
import logging

import pytest
from PIL import Image

from branded_docs.core.models.documents import ZatcaInfo
from branded_docs.utils import qr as qr_module
from branded_docs.utils.pdf.core.images import detect_image_format, fit_box, image_from_matrix, load_data_uri_image


@pytest.mark.parametrize(
    "uri, expected",
    [
        ("data:image/png;base64,AAAA", "PNG"),
        ("data:image/JPG;base64,AAAA", "JPEG"),
        ("data:image/jpeg;base64,AAAA", "JPEG"),
        ("data:image/svg+xml;base64,AAAA", None),
        ("https://example.com/logo.png", None),
        (None, None),
    ],
)
def test_detect_image_format(uri, expected):
    assert detect_image_format(uri) == expected


def test_loads_png_and_flattens_alpha(png_data_uri):
    image = load_data_uri_image(png_data_uri)
    assert (image.width, image.height) == (8, 4)
    assert image.aspect == 2
    assert load_data_uri_image(png_data_uri).key == image.key


def test_loads_jpeg():
    buf = io.BytesIO()
    Image.new("RGB", (5, 5), (200, 10, 10)).save(buf, format="JPEG")
    uri = "data:image/jpeg;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
    assert load_data_uri_image(uri).width == 5


def test_broken_image_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        assert load_data_uri_image("data:image/png;base64,bm90IGFuIGltYWdl") is None
    assert "Skipping undecodable image" in caplog.text
    assert load_data_uri_image("data:image/gif;base64,R0lGOD") is None


def test_fit_box_keeps_aspect(png_data_uri):
    image = load_data_uri_image(png_data_uri)
    assert fit_box(image, 100, 100) == (100, 50)
    assert fit_box(image, 100, 20) == (40, 20)


def test_matrix_image_scales_modules():
    image = image_from_matrix([[True, False], [False, True]], scale=3)
    assert (image.width, image.height) == (6, 6)


def test_qr_prefers_supplied_image(png_data_uri):
    image = qr_module.zatca_qr_image(ZatcaInfo(qr_code_image=png_data_uri, qr_code_data="AQID"))
    assert image.width == 8


def test_qr_generated_from_payload():
    image = qr_module.zatca_qr_image(ZatcaInfo(qr_code_data="AQVBY21lAg8zMDAwMDAwMDAwMDAwMDM="))
    assert image is not None
    assert image.width == image.height


def test_qr_missing_payload():
    assert qr_module.zatca_qr_image(None) is None
    assert qr_module.zatca_qr_image(ZatcaInfo()) is None


def test_make_qr_matrix_without_qrcode(monkeypatch):
    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "qrcode":
            raise ImportError("No module named qrcode")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    assert qr_module.make_qr_matrix("data") is None
    assert qr_module.zatca_qr_image(ZatcaInfo(qr_code_data="AQID")) is None
