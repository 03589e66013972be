from pathlib import Path
from typing import Optional

from branded_docs.utils.pdf.exports._write import export_document


def export_invoice_pdf(target_dir: Path, invoice, language: str = "en", branding=None, **options) -> Optional[Path]:
    """
    Export a tax invoice; the file is named after the invoice number.
    """
    return export_document("invoice", target_dir, invoice, language, branding, **options)
