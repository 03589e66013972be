from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from branded_docs.core.services.settings import load_render_settings
from branded_docs.utils.pdf.exports._write import export_document
from branded_docs.utils.pdf.renderers.pdf_renderer import DOCUMENT_KINDS


def _read_json(path: str | None):
    if not path:
        return None
    return json.loads(Path(path).read_text(encoding="utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="branded-docs", description="Render a branded PDF document.")
    parser.add_argument("kind", choices=sorted(DOCUMENT_KINDS))
    parser.add_argument("record", help="JSON file with the invoice/report/project record")
    parser.add_argument("--language", default="en", choices=("en", "ar"))
    parser.add_argument("--branding", help="JSON file with tenant branding (or the whole tenant document)")
    parser.add_argument("--settings", help="render settings JSON file")
    parser.add_argument("--out", default=".", help="output directory")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_render_settings(Path(args.settings) if args.settings else None)
    path = export_document(
        args.kind,
        Path(args.out),
        _read_json(args.record),
        args.language,
        _read_json(args.branding),
        settings=settings,
    )
    if path is None:
        logging.getLogger(__name__).warning("Record file is empty; nothing rendered")
        return 1
    print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
