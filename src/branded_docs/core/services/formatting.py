from __future__ import annotations

from datetime import date, datetime

DEFAULT_CURRENCY = "SAR"


def format_currency(value, language: str = "en", currency: str | None = None) -> str:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        numeric = 0.0
    if numeric != numeric or numeric in (float("inf"), float("-inf")):
        numeric = 0.0
    code = (currency or DEFAULT_CURRENCY).upper()
    amount = f"{numeric:,.2f}"
    if language == "ar":
        return f"{amount} {code}"
    return f"{code} {amount}"


def parse_datetime(value) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value, language: str = "en") -> str:
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    if language == "ar":
        return parsed.strftime("%d/%m/%Y")
    return parsed.strftime("%m/%d/%Y")


def format_datetime(value, language: str = "en") -> str:
    parsed = parse_datetime(value)
    if parsed is None:
        return ""
    return f"{format_date(parsed, language)} {parsed.strftime('%H:%M')}"


def format_percent(value) -> str:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        numeric = 0.0
    clamped = max(0.0, min(100.0, numeric))
    if clamped.is_integer():
        return f"{int(clamped)}%"
    return f"{clamped:.1f}%"
