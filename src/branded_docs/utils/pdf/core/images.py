"""
Raster images (logo, ZATCA QR) for PDF embedding.

Only `data:image/png|jpeg|jpg` URIs are accepted. Images are decoded with
Pillow, flattened onto white and stored as Flate-compressed RGB XObjects.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import io
import logging
import re
import zlib
from dataclasses import dataclass
from typing import Optional, Sequence

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:image/(png|jpeg|jpg);", re.IGNORECASE)


@dataclass(frozen=True)
class PdfImage:
    key: str
    width: int
    height: int
    data: bytes  # zlib-compressed 8-bit RGB samples

    @property
    def aspect(self) -> float:
        return self.width / float(self.height or 1)


def detect_image_format(data_uri) -> Optional[str]:
    if not isinstance(data_uri, str):
        return None
    match = _DATA_URI_RE.match(data_uri.strip())
    if not match:
        return None
    fmt = match.group(1).lower()
    return "JPEG" if fmt in ("jpeg", "jpg") else "PNG"


def _flatten(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    return img.convert("RGB")


def load_data_uri_image(data_uri) -> Optional[PdfImage]:
    """Decode a raster data URI; unsupported formats and broken payloads give None."""
    if detect_image_format(data_uri) is None:
        return None
    _, _, payload = data_uri.strip().partition(",")
    try:
        raw = base64.b64decode(payload, validate=False)
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            rgb = _flatten(img)
    except (binascii.Error, ValueError, OSError, UnidentifiedImageError) as exc:
        logger.warning("Skipping undecodable image: %s", exc)
        return None
    samples = rgb.tobytes()
    key = hashlib.sha1(raw).hexdigest()[:12]
    return PdfImage(key=key, width=rgb.width, height=rgb.height, data=zlib.compress(samples))


def image_from_matrix(matrix: Sequence[Sequence[bool]], scale: int = 4) -> PdfImage:
    """Rasterise a QR module matrix (True = dark) into an RGB image."""
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    img = Image.new("RGB", (max(1, cols * scale), max(1, rows * scale)), (255, 255, 255))
    pixels = img.load()
    for r in range(rows):
        for c in range(cols):
            if not matrix[r][c]:
                continue
            for dy in range(scale):
                for dx in range(scale):
                    pixels[c * scale + dx, r * scale + dy] = (0, 0, 0)
    samples = img.tobytes()
    key = "qr" + hashlib.sha1(samples).hexdigest()[:10]
    return PdfImage(key=key, width=img.width, height=img.height, data=zlib.compress(samples))


def fit_box(image: PdfImage, max_w: float, max_h: float) -> tuple[float, float]:
    """Largest (w, h) with the image aspect ratio inside max_w x max_h."""
    if image.aspect >= max_w / float(max_h or 1):
        return max_w, max_w / image.aspect
    return max_h * image.aspect, max_h


def build_image_obj(obj_id: int, image: PdfImage) -> bytes:
    head = (
        f"{obj_id} 0 obj << /Type /XObject /Subtype /Image /Width {image.width} /Height {image.height} "
        f"/ColorSpace /DeviceRGB /BitsPerComponent 8 /Filter /FlateDecode /Length {len(image.data)} >> stream\n"
    ).encode("ascii")
    return head + image.data + b"\nendstream endobj\n"
