from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class TenantBranding:
    """Per-tenant visual configuration as delivered by the tenant API."""

    primary_color: str | None = None
    secondary_color: str | None = None
    logo: str | None = None
    invoice_pdf_template: int | None = None
    header_style: str | None = None
    sidebar_style: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping | None) -> "TenantBranding":
        data = data or {}
        template = data.get("invoicePdfTemplate", data.get("invoice_pdf_template"))
        try:
            template_id = int(template) if template is not None else None
        except (TypeError, ValueError, OverflowError):
            template_id = None
        return cls(
            primary_color=data.get("primaryColor") or data.get("primary_color"),
            secondary_color=data.get("secondaryColor") or data.get("secondary_color"),
            logo=data.get("logo") or None,
            invoice_pdf_template=template_id,
            header_style=data.get("headerStyle") or data.get("header_style"),
            sidebar_style=data.get("sidebarStyle") or data.get("sidebar_style"),
        )


def coerce_branding(branding) -> TenantBranding:
    if isinstance(branding, TenantBranding):
        return branding
    if isinstance(branding, Mapping) and "branding" in branding and isinstance(branding["branding"], Mapping):
        # whole tenant document
        return TenantBranding.from_dict(branding["branding"])
    return TenantBranding.from_dict(branding)
