from __future__ import annotations

import re

_FORBIDDEN = re.compile(r'[\\/:*?"<>|]+')
_WHITESPACE = re.compile(r"\s+")


def sanitize_file_name(value, fallback: str = "document") -> str:
    """Strip characters that are not allowed in file names and collapse whitespace."""
    text = "" if value is None else str(value)
    text = _WHITESPACE.sub(" ", _FORBIDDEN.sub("", text)).strip()
    return text or fallback


def pdf_file_name(value, fallback: str = "document") -> str:
    return f"{sanitize_file_name(value, fallback)}.pdf"
