"""
PDF object builder: assembles page content streams, fonts and images into
minimal PDF byte output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

from branded_docs.utils.pdf.core.fonts import (
    BASE_BOLD,
    BASE_REGULAR,
    EMBEDDED_BOLD,
    EMBEDDED_REGULAR,
    build_base_font_obj,
    build_embedded_font_objs,
)
from branded_docs.utils.pdf.core.images import build_image_obj

if TYPE_CHECKING:
    from branded_docs.utils.pdf.core.surface import PdfDocument


def _num(value: float) -> str:
    return f"{float(value):.2f}".rstrip("0").rstrip(".")


def _font_objects(document: "PdfDocument", first_id: int) -> tuple[list[bytes], Dict[str, int], int]:
    objs = [build_base_font_obj(3, "Helvetica"), build_base_font_obj(4, "Helvetica-Bold")]
    font_ids = {BASE_REGULAR: 3, BASE_BOLD: 4}
    next_id = first_id
    if document.fonts is None:
        return objs, font_ids, next_id

    regular, bold = document.fonts.regular, document.fonts.bold
    used_regular = document.used_glyphs[EMBEDDED_REGULAR]
    used_bold = document.used_glyphs[EMBEDDED_BOLD]
    if bold is regular:
        # one font program serves both roles
        if used_regular or used_bold:
            font_objs, type0_id, next_id = build_embedded_font_objs(regular, used_regular | used_bold, next_id)
            objs.extend(font_objs)
            font_ids[EMBEDDED_REGULAR] = font_ids[EMBEDDED_BOLD] = type0_id
        return objs, font_ids, next_id

    for name, font, used in ((EMBEDDED_REGULAR, regular, used_regular), (EMBEDDED_BOLD, bold, used_bold)):
        if not used:
            continue
        font_objs, type0_id, next_id = build_embedded_font_objs(font, used, next_id)
        objs.extend(font_objs)
        font_ids[name] = type0_id
    return objs, font_ids, next_id


def build_pdf_bytes(document: "PdfDocument") -> bytes:
    """
    Serialize every page of `document` into ready-to-write PDF bytes.
    Object 1 is the catalog, 2 the page tree, 3/4 the built-in fonts.
    """
    font_objs, font_ids, next_obj_id = _font_objects(document, 5)

    image_objs: list[bytes] = []
    image_ids: Dict[str, int] = {}
    for name, image in document.images.items():
        image_objs.append(build_image_obj(next_obj_id, image))
        image_ids[name] = next_obj_id
        next_obj_id += 1

    font_ref = " ".join(f"{name} {obj_id} 0 R" for name, obj_id in font_ids.items())
    xobject_ref = " ".join(f"/{name} {obj_id} 0 R" for name, obj_id in image_ids.items())
    resources = f"<< /Font << {font_ref} >>"
    if xobject_ref:
        resources += f" /XObject << {xobject_ref} >>"
    resources += " >>"

    page_objs: list[bytes] = []
    pages_kids: List[int] = []
    media_box = f"[0 0 {_num(document.width)} {_num(document.height)}]"
    for page in document.pages:
        stream = page.content().encode("ascii", "ignore")
        content_id = next_obj_id
        page_id = next_obj_id + 1
        pages_kids.append(page_id)
        page_objs.append(
            f"{content_id} 0 obj << /Length {len(stream)} >> stream\n".encode("ascii") + stream + b"\nendstream endobj\n"
        )
        page_objs.append(
            f"{page_id} 0 obj << /Type /Page /Parent 2 0 R /MediaBox {media_box} /Contents {content_id} 0 R /Resources {resources} >> endobj\n".encode(
                "ascii"
            )
        )
        next_obj_id += 2

    kids_ref = " ".join(f"{kid} 0 R" for kid in pages_kids)
    pages_obj = f"2 0 obj << /Type /Pages /Count {len(pages_kids)} /Kids [{kids_ref}] >> endobj\n".encode("ascii")
    catalog_obj = b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n"

    objs = [catalog_obj, pages_obj] + font_objs + image_objs + page_objs

    header = b"%PDF-1.4\n"
    offsets = [0]
    pdf_body = bytearray()
    current_offset = len(header)
    for obj in objs:
        offsets.append(current_offset)
        pdf_body += obj
        current_offset += len(obj)

    xref_entries = ["0000000000 65535 f \n"] + [_format_xref_entry(off) for off in offsets[1:]]
    xref = ("xref\n0 %d\n" % len(offsets)).encode("ascii") + "".join(xref_entries).encode("ascii")
    startxref = len(header) + len(pdf_body)
    trailer = f"trailer << /Size {len(offsets)} /Root 1 0 R >>\nstartxref\n{startxref}\n%%EOF\n".encode("ascii")

    return header + bytes(pdf_body) + xref + trailer


def _format_xref_entry(offset: int) -> str:
    return f"{offset:010d} 00000 n \n"
