from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from branded_docs.utils.pdf.renderers.pdf_renderer import render

logger = logging.getLogger(__name__)


def export_document(kind: str, target_dir: Path, record, language: str = "en", branding=None, **options) -> Optional[Path]:
    """Render and write `<target_dir>/<filename>`; a missing record writes nothing."""
    rendered = render(kind, record, language, branding, **options)
    if rendered is None:
        return None
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)
    path = target / rendered.filename
    path.write_bytes(rendered.data)
    logger.info("Wrote %s", path)
    return path
