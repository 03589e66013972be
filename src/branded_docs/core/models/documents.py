"""
Read-only snapshots of the three renderable records.

API payloads are duck-typed (fields go missing, camelCase vs. snake_case,
Arabic/English name pairs). Everything is coerced here, once, so the drawing
code never has to check for presence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence


def _safe_float(value, default: float = 0.0) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return float(default)
    if numeric != numeric or numeric in (float("inf"), float("-inf")):
        return float(default)
    return numeric


def _optional_float(value) -> float | None:
    if value is None or value == "":
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return None
    if numeric != numeric or numeric in (float("inf"), float("-inf")):
        return None
    return numeric


def _safe_int(value, default: int = 0) -> int:
    return int(_safe_float(value, default))


def _safe_str(value) -> str:
    if value is None:
        return ""
    return str(value)


def _mapping(value) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _sequence(value) -> Sequence:
    return value if isinstance(value, (list, tuple)) else []


def _pick(data: Mapping, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


# -------- Invoice --------
@dataclass(frozen=True)
class Party:
    name: str = ""
    name_ar: str = ""
    vat_number: str = ""
    city: str = ""
    district: str = ""

    @classmethod
    def from_dict(cls, data) -> "Party":
        data = _mapping(data)
        address = _mapping(data.get("address"))
        return cls(
            name=_safe_str(data.get("name")),
            name_ar=_safe_str(_pick(data, "nameAr", "name_ar")),
            vat_number=_safe_str(_pick(data, "vatNumber", "vat_number")),
            city=_safe_str(address.get("city")),
            district=_safe_str(address.get("district")),
        )

    def display_name(self, language: str) -> str:
        if language == "ar":
            return self.name_ar or self.name
        return self.name or self.name_ar

    @property
    def address_line(self) -> str:
        return ", ".join(part for part in (self.city, self.district) if part)


@dataclass(frozen=True)
class InvoiceLine:
    product_name: str = ""
    product_name_ar: str = ""
    description: str = ""
    quantity: float = 0.0
    unit_price: float = 0.0
    tax_rate: float = 0.0
    tax_amount: float | None = None
    line_total: float | None = None
    line_total_with_tax: float | None = None

    @classmethod
    def from_dict(cls, data) -> "InvoiceLine":
        data = _mapping(data)
        return cls(
            product_name=_safe_str(_pick(data, "productName", "product_name")),
            product_name_ar=_safe_str(_pick(data, "productNameAr", "product_name_ar")),
            description=_safe_str(data.get("description")),
            quantity=_safe_float(data.get("quantity")),
            unit_price=_safe_float(_pick(data, "unitPrice", "unit_price")),
            tax_rate=_safe_float(_pick(data, "taxRate", "tax_rate")),
            tax_amount=_optional_float(_pick(data, "taxAmount", "tax_amount")),
            line_total=_optional_float(_pick(data, "lineTotal", "line_total")),
            line_total_with_tax=_optional_float(_pick(data, "lineTotalWithTax", "line_total_with_tax")),
        )

    def display_name(self, language: str) -> str:
        if language == "ar" and self.product_name_ar:
            return self.product_name_ar
        return self.product_name or self.description


@dataclass(frozen=True)
class ZatcaInfo:
    submission_status: str = ""
    qr_code_image: str = ""
    qr_code_data: str = ""

    @classmethod
    def from_dict(cls, data) -> "ZatcaInfo | None":
        if not isinstance(data, Mapping):
            return None
        return cls(
            submission_status=_safe_str(_pick(data, "submissionStatus", "submission_status")),
            qr_code_image=_safe_str(_pick(data, "qrCodeImage", "qr_code_image")),
            qr_code_data=_safe_str(_pick(data, "qrCodeData", "qr_code_data")),
        )


@dataclass(frozen=True)
class Invoice:
    invoice_number: str = ""
    issue_date: str = ""
    seller: Party = field(default_factory=Party)
    buyer: Party = field(default_factory=Party)
    line_items: tuple[InvoiceLine, ...] = ()
    currency: str = ""
    taxable_amount: float | None = None
    total_tax: float | None = None
    grand_total: float | None = None
    transaction_type: str = ""
    flow: str = "sell"
    zatca: ZatcaInfo | None = None

    kind = "invoice"

    @classmethod
    def from_dict(cls, data) -> "Invoice":
        data = _mapping(data)
        return cls(
            invoice_number=_safe_str(_pick(data, "invoiceNumber", "invoice_number")),
            issue_date=_safe_str(_pick(data, "issueDate", "issue_date")),
            seller=Party.from_dict(data.get("seller")),
            buyer=Party.from_dict(data.get("buyer")),
            line_items=tuple(InvoiceLine.from_dict(item) for item in _sequence(_pick(data, "lineItems", "line_items"))),
            currency=_safe_str(data.get("currency")),
            taxable_amount=_optional_float(_pick(data, "taxableAmount", "taxable_amount", "subtotalAmount")),
            total_tax=_optional_float(_pick(data, "totalTax", "total_tax")),
            grand_total=_optional_float(_pick(data, "grandTotal", "grand_total")),
            transaction_type=_safe_str(_pick(data, "transactionType", "transaction_type")),
            flow=_safe_str(data.get("flow")) or "sell",
            zatca=ZatcaInfo.from_dict(data.get("zatca")),
        )

    @property
    def is_purchase(self) -> bool:
        return self.flow == "purchase"


# -------- Business report --------
@dataclass(frozen=True)
class ReportPeriod:
    start_date: str = ""
    end_date: str = ""


@dataclass(frozen=True)
class InvoiceTotals:
    grand_total: float = 0.0
    invoice_count: int = 0

    @classmethod
    def from_dict(cls, data) -> "InvoiceTotals":
        data = _mapping(data)
        return cls(
            grand_total=_safe_float(_pick(data, "grandTotal", "grand_total")),
            invoice_count=_safe_int(_pick(data, "invoiceCount", "invoice_count")),
        )


@dataclass(frozen=True)
class ExpenseTotals:
    total_amount: float = 0.0
    expense_count: int = 0

    @classmethod
    def from_dict(cls, data) -> "ExpenseTotals":
        data = _mapping(data)
        return cls(
            total_amount=_safe_float(_pick(data, "totalAmount", "total_amount")),
            expense_count=_safe_int(_pick(data, "expenseCount", "expense_count")),
        )


@dataclass(frozen=True)
class BreakdownRow:
    """One aggregate row; `key` is the group id (`_id` in the API)."""

    key: str = ""
    count: int = 0
    amount: float = 0.0
    tax: float = 0.0

    @classmethod
    def from_dict(cls, data, count_keys: Sequence[str], amount_keys: Sequence[str]) -> "BreakdownRow":
        data = _mapping(data)
        return cls(
            key=_safe_str(_pick(data, "_id", "id", "key")),
            count=_safe_int(_pick(data, *count_keys)),
            amount=_safe_float(_pick(data, *amount_keys)),
            tax=_safe_float(data.get("tax")),
        )


@dataclass(frozen=True)
class BusinessReport:
    period: ReportPeriod = field(default_factory=ReportPeriod)
    currency: str = ""
    sales: InvoiceTotals = field(default_factory=InvoiceTotals)
    purchases: InvoiceTotals = field(default_factory=InvoiceTotals)
    expenses: ExpenseTotals = field(default_factory=ExpenseTotals)
    net: float = 0.0
    sales_by_transaction_type: tuple[BreakdownRow, ...] = ()
    top_customers: tuple[BreakdownRow, ...] = ()
    expenses_by_category: tuple[BreakdownRow, ...] = ()

    kind = "report"

    @classmethod
    def from_dict(cls, data) -> "BusinessReport":
        data = _mapping(data)
        period = _mapping(data.get("period"))
        totals = _mapping(data.get("totals"))
        breakdown = _mapping(data.get("breakdown"))

        def rows(key: str, count_keys: Sequence[str], amount_keys: Sequence[str]) -> tuple[BreakdownRow, ...]:
            raw = _sequence(_pick(breakdown, key, default=[]))
            return tuple(BreakdownRow.from_dict(item, count_keys, amount_keys) for item in raw)

        return cls(
            period=ReportPeriod(
                start_date=_safe_str(_pick(period, "startDate", "start_date")),
                end_date=_safe_str(_pick(period, "endDate", "end_date")),
            ),
            currency=_safe_str(data.get("currency")),
            sales=InvoiceTotals.from_dict(totals.get("sales")),
            purchases=InvoiceTotals.from_dict(totals.get("purchases")),
            expenses=ExpenseTotals.from_dict(totals.get("expenses")),
            net=_safe_float(totals.get("net")),
            sales_by_transaction_type=rows("salesByTransactionType", ("invoiceCount", "invoice_count"), ("revenue",)),
            top_customers=rows("topCustomers", ("invoiceCount", "invoice_count"), ("revenue",)),
            expenses_by_category=rows("expensesByCategory", ("count",), ("totalAmount", "total_amount")),
        )


# -------- Project progress --------
@dataclass(frozen=True)
class ProgressUpdate:
    created_at: str = ""
    progress: float = 0.0
    note: str = ""
    created_by: str = ""

    @classmethod
    def from_dict(cls, data) -> "ProgressUpdate":
        data = _mapping(data)
        return cls(
            created_at=_safe_str(_pick(data, "createdAt", "created_at")),
            progress=_safe_float(data.get("progress")),
            note=_safe_str(data.get("note")),
            created_by=_author_label(_pick(data, "createdBy", "created_by")),
        )


def _author_label(value) -> str:
    if isinstance(value, Mapping):
        first = _safe_str(_pick(value, "firstName", "first_name"))
        if first:
            last = _safe_str(_pick(value, "lastName", "last_name"))
            return f"{first} {last}".strip()
        return _safe_str(value.get("email"))
    return _safe_str(value)


@dataclass(frozen=True)
class ProjectProgress:
    code: str = ""
    name_en: str = ""
    name_ar: str = ""
    status: str = ""
    owner_name: str = ""
    due_date: str = ""
    progress: float = 0.0
    budget: float = 0.0
    currency: str = ""
    progress_updates: tuple[ProgressUpdate, ...] = ()

    kind = "project"

    @classmethod
    def from_dict(cls, data) -> "ProjectProgress":
        data = _mapping(data)
        return cls(
            code=_safe_str(data.get("code")),
            name_en=_safe_str(_pick(data, "nameEn", "name_en", "name")),
            name_ar=_safe_str(_pick(data, "nameAr", "name_ar")),
            status=_safe_str(data.get("status")),
            owner_name=_safe_str(_pick(data, "ownerName", "owner_name")),
            due_date=_safe_str(_pick(data, "dueDate", "due_date")),
            progress=_safe_float(data.get("progress")),
            budget=_safe_float(data.get("budget")),
            currency=_safe_str(data.get("currency")),
            progress_updates=tuple(
                ProgressUpdate.from_dict(item) for item in _sequence(_pick(data, "progressUpdates", "progress_updates"))
            ),
        )

    def display_name(self, language: str) -> str:
        if language == "ar":
            return self.name_ar or self.name_en
        return self.name_en or self.name_ar


RECORD_TYPES = {
    "invoice": Invoice,
    "report": BusinessReport,
    "project": ProjectProgress,
}


def coerce_record(kind: str, record):
    """Accept an API mapping or an already-built record of the matching kind."""
    record_type = RECORD_TYPES.get(kind)
    if record_type is None:
        raise ValueError(f"Unknown document kind: {kind!r}")
    if isinstance(record, record_type):
        return record
    return record_type.from_dict(record)
