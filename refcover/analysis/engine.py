"""Compare reference publications against each search tool's results."""

import logging

from refcover.analysis.matching import (
    normalize_title,
    presence_for,
    record_key,
    tool_title_keys,
)
from refcover.analysis.models import (
    AnalysisResult,
    OtherEntry,
    ReferenceEntry,
    SearchTool,
)
from refcover.parsers.record_parser import parse_publication
from refcover.parsers.segmenter import split_publications

logger = logging.getLogger(__name__)


# ── Public API ───────────────────────────────────────────────────────


def analyze_results(reference_text: str, tools: list[SearchTool]) -> AnalysisResult:
    """Build the reference x tool presence matrix and the other articles.

    Other articles are tool records whose normalized title matches no
    reference. They are merged across tools by normalized title, keeping
    the first raw record seen (tool order, then result order).
    """
    keys_by_tool = tool_title_keys(tools)

    reference_presence: list[ReferenceEntry] = []
    reference_keys: set[str] = set()
    for record in split_publications(reference_text):
        parsed = parse_publication(record)
        key = normalize_title(parsed.title)
        reference_keys.add(key)
        reference_presence.append(
            ReferenceEntry(
                original_text=record,
                parsed=parsed,
                presence=presence_for(key, tools, keys_by_tool),
            )
        )

    other_records = _collect_other_records(tools, reference_keys)

    other_articles: list[OtherEntry] = []
    for key, record in other_records.items():
        other_articles.append(
            OtherEntry(
                original_text=record,
                parsed=parse_publication(record),
                presence=presence_for(key, tools, keys_by_tool),
            )
        )

    result = AnalysisResult(
        reference_presence=reference_presence,
        other_articles=other_articles,
    )
    logger.info(
        "Analysis: %d references x %d tools, %d other articles",
        len(reference_presence),
        len(tools),
        len(other_articles),
    )
    return result


def summarize_results(result: AnalysisResult, tools: list[SearchTool]) -> dict:
    """Counts per tool: references found and other articles returned.

    Keyed by tool id, since several tools may share a display name.
    """
    per_tool = {}
    for tool in tools:
        per_tool[tool.id] = {
            "name": tool.name,
            "references_found": sum(
                1 for e in result.reference_presence if e.presence.get(tool.id)
            ),
            "other_articles": sum(
                1 for e in result.other_articles if e.presence.get(tool.id)
            ),
        }
    return {
        "references_total": len(result.reference_presence),
        "other_articles_total": len(result.other_articles),
        "tools": per_tool,
    }


# ── Helpers ──────────────────────────────────────────────────────────


def _collect_other_records(
    tools: list[SearchTool], reference_keys: set[str]
) -> dict[str, str]:
    """First raw record per normalized title that is not a reference."""
    others: dict[str, str] = {}
    for tool in tools:
        for record in split_publications(tool.results):
            key = record_key(record)
            if key in reference_keys or key in others:
                continue
            others[key] = record
    return others
