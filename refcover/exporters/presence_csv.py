"""Presence table export: CSV for spreadsheet tools."""

import csv
import io
import logging

from refcover.analysis.models import AnalysisResult, PresenceEntry, SearchTool

logger = logging.getLogger(__name__)

BASE_HEADERS = ["Type", "Titre", "Auteurs", "Année", "Journal", "DOI"]
REFERENCE_LABEL = "Référence"
OTHER_LABEL = "Autre"
YES = "Oui"
NO = "Non"
AUTHOR_SEPARATOR = "; "

# Lets spreadsheet tools detect UTF-8 (accented headers and titles)
BOM = "\ufeff"


# ── Helpers ──────────────────────────────────────────────────────────


def build_presence_rows(
    result: AnalysisResult, tools: list[SearchTool]
) -> tuple[list[str], list[list[str]]]:
    """Build header and data rows: references first, then other articles.

    Returns (headers, rows) with one presence column per tool, in tool order.
    """
    headers = BASE_HEADERS + [tool.name for tool in tools]

    rows = [_row(REFERENCE_LABEL, e, tools) for e in result.reference_presence]
    rows.extend(_row(OTHER_LABEL, e, tools) for e in result.other_articles)
    return headers, rows


def _row(label: str, entry: PresenceEntry, tools: list[SearchTool]) -> list[str]:
    pub = entry.parsed
    return [
        label,
        pub.title,
        AUTHOR_SEPARATOR.join(pub.authors),
        pub.year or "",
        pub.journal or "",
        pub.doi or "",
    ] + [YES if entry.presence.get(tool.id) else NO for tool in tools]


# ── CSV Export ───────────────────────────────────────────────────────


def render_presence_csv(result: AnalysisResult, tools: list[SearchTool]) -> str:
    """Render the presence table as BOM-prefixed CSV text."""
    headers, rows = build_presence_rows(result, tools)

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return BOM + buf.getvalue()


def export_presence_csv(
    result: AnalysisResult, tools: list[SearchTool], output_path: str
) -> None:
    """Export the presence table as CSV."""
    content = render_presence_csv(result, tools)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        f.write(content)

    logger.info(
        "Presence CSV exported to %s (%d rows)",
        output_path,
        len(result.reference_presence) + len(result.other_articles),
    )
