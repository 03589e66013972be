from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from branded_docs.core.models.documents import ProgressUpdate, ProjectProgress
from branded_docs.core.services.formatting import (
    DEFAULT_CURRENCY,
    format_currency,
    format_date,
    format_datetime,
    format_percent,
    parse_datetime,
)
from branded_docs.core.services.labels import label
from branded_docs.utils.pdf.core.bidi import RenderContext
from branded_docs.utils.pdf.core.ops import (
    DocumentAssets,
    DrawFooterPass,
    DrawHeader,
    DrawMetaCard,
    DrawSectionTitle,
    DrawTable,
    MetaPair,
    TableRow,
)
from branded_docs.utils.pdf.core.table_layout import ColumnSpec
from branded_docs.utils.pdf.core.theme import Theme


def _update_timestamp(update: ProgressUpdate) -> float:
    parsed = parse_datetime(update.created_at)
    if parsed is None:
        return float("-inf")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def sort_updates(updates: Sequence[ProgressUpdate]) -> Tuple[ProgressUpdate, ...]:
    """Newest first; updates without a date go last."""
    return tuple(sorted(updates, key=_update_timestamp, reverse=True))


def compose_project_progress(
    project: ProjectProgress,
    theme: Theme,
    ctx: RenderContext,
    assets: Optional[DocumentAssets] = None,
    *,
    generated_at: Optional[datetime] = None,
    default_currency: str = DEFAULT_CURRENCY,
) -> list:
    lang = ctx.language
    assets = assets or DocumentAssets()
    currency = project.currency or default_currency
    name = project.display_name(lang)
    due = format_date(project.due_date, lang)

    rows = tuple(
        TableRow(
            cells=(
                format_datetime(update.created_at, lang),
                format_percent(update.progress),
                update.note,
                update.created_by,
            )
        )
        for update in sort_updates(project.progress_updates)
    )

    return [
        DrawHeader(
            title=label("project_title", lang),
            subtitle=name,
            number_label=label("code", lang),
            number=project.code,
            date_label=label("due_date", lang),
            date=due,
            logo=assets.logo,
        ),
        DrawMetaCard(
            pairs=(
                MetaPair(label("code", lang), project.code),
                MetaPair(label("project", lang), name),
                MetaPair(label("status", lang), project.status),
                MetaPair(label("owner", lang), project.owner_name),
                MetaPair(label("due_date", lang), due),
                MetaPair(label("progress", lang), format_percent(project.progress)),
                MetaPair(label("budget", lang), format_currency(project.budget, lang, currency)),
            ),
            progress=project.progress,
        ),
        DrawSectionTitle(label("progress_history", lang)),
        DrawTable(
            columns=(
                ColumnSpec("date", label("col_date", lang), 120, min_width=80),
                ColumnSpec("progress", label("col_progress", lang), 64, min_width=48, align="center"),
                ColumnSpec("note", label("col_note", lang), 241, min_width=80, flex=True),
                ColumnSpec("by", label("col_by", lang), 90, min_width=60),
            ),
            rows=rows,
            placeholder=label("no_data", lang),
        ),
        DrawFooterPass(
            generated_label=label("generated", lang),
            generated_at=format_datetime(generated_at or datetime.now(), lang),
            page_label=label("page", lang),
        ),
    ]


def project_file_stem(project: ProjectProgress, language: str) -> str:
    return f"{project.code or 'project'}_progress"
