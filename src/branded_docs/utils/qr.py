"""
Minimal QR helper.
Uses the `qrcode` library if available; otherwise returns graceful fallbacks.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from branded_docs.core.models.documents import ZatcaInfo
from branded_docs.utils.pdf.core.images import PdfImage, image_from_matrix, load_data_uri_image

logger = logging.getLogger(__name__)


def make_qr_matrix(data: str) -> Optional[Sequence[Sequence[bool]]]:
    try:
        import qrcode
    except ImportError:
        logger.info("qrcode is not installed; QR codes are skipped")
        return None

    qr = qrcode.QRCode(border=1, box_size=1)
    qr.add_data(data)
    qr.make(fit=True)
    return qr.get_matrix()


def zatca_qr_image(zatca: Optional[ZatcaInfo]) -> Optional[PdfImage]:
    """
    The ZATCA QR as an image: the supplied PNG/JPEG data URI when there is one,
    otherwise a code generated from the TLV payload in `qr_code_data`.
    """
    if zatca is None:
        return None
    if zatca.qr_code_image:
        image = load_data_uri_image(zatca.qr_code_image)
        if image is not None:
            return image
    if not zatca.qr_code_data:
        return None
    matrix = make_qr_matrix(zatca.qr_code_data)
    if not matrix:
        return None
    return image_from_matrix(matrix)
