from pathlib import Path
from typing import Optional

from branded_docs.utils.pdf.exports._write import export_document


def export_project_progress_pdf(target_dir: Path, project, language: str = "en", branding=None, **options) -> Optional[Path]:
    """
    Export a project snapshot with its progress history (`<code>_progress.pdf`).
    """
    return export_document("project", target_dir, project, language, branding, **options)
