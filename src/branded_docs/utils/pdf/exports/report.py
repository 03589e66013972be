from pathlib import Path
from typing import Optional

from branded_docs.utils.pdf.exports._write import export_document


def export_business_report_pdf(target_dir: Path, report, language: str = "en", branding=None, **options) -> Optional[Path]:
    return export_document("report", target_dir, report, language, branding, **options)
