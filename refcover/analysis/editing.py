"""Edit and delete entries of a computed analysis result.

Entries are addressed by their position in the result lists. Deleting an
entry shifts every later entry down by one, so callers holding indices
must refresh them after a deletion.
"""

import logging

from refcover.analysis.models import AnalysisResult, EntryKind
from refcover.parsers.models import ParsedPublication
from refcover.parsers.record_parser import UNTITLED, parse_authors_lines
from refcover.parsers.segmenter import join_publications, split_publications

logger = logging.getLogger(__name__)

_LIST_FIELDS = {
    "reference": "reference_presence",
    "other": "other_articles",
}


def edit_entry(
    result: AnalysisResult,
    kind: EntryKind,
    index: int,
    parsed: ParsedPublication,
) -> AnalysisResult:
    """Return a copy of ``result`` with one entry's parsed fields replaced."""
    field = _list_field(kind)
    entries = list(getattr(result, field))
    _check_index(entries, index, kind)

    entries[index] = entries[index].model_copy(update={"parsed": parsed})
    return result.model_copy(update={field: entries})


def publication_from_form(
    title: str,
    authors_text: str = "",
    year: str = "",
    journal: str = "",
    doi: str = "",
) -> ParsedPublication:
    """Build an edited publication from editor fields.

    Authors are entered one per line; blank optional fields are unset.
    """
    return ParsedPublication(
        title=title.strip() or UNTITLED,
        authors=parse_authors_lines(authors_text),
        year=year.strip() or None,
        journal=journal.strip() or None,
        doi=doi.strip() or None,
    )


def remove_publication(reference_text: str, index: int) -> str:
    """Drop one record from a reference text block and rebuild it."""
    records = split_publications(reference_text)
    _check_index(records, index, "reference")
    del records[index]
    return join_publications(records)


def delete_reference(
    reference_text: str,
    result: AnalysisResult | None,
    index: int,
) -> tuple[str, AnalysisResult | None]:
    """Remove a reference from both the raw text and the computed result.

    ``result`` may be None when no analysis has been run yet.
    """
    new_text = remove_publication(reference_text, index)
    if result is None:
        return new_text, None

    entries = list(result.reference_presence)
    _check_index(entries, index, "reference")
    del entries[index]
    logger.info("Deleted reference %d (%d remaining)", index, len(entries))
    return new_text, result.model_copy(update={"reference_presence": entries})


def delete_other_article(result: AnalysisResult, index: int) -> AnalysisResult:
    """Remove an other-article from the computed result only."""
    entries = list(result.other_articles)
    _check_index(entries, index, "other")
    del entries[index]
    logger.info("Deleted other article %d (%d remaining)", index, len(entries))
    return result.model_copy(update={"other_articles": entries})


# ── Helpers ──────────────────────────────────────────────────────────


def _list_field(kind: str) -> str:
    if kind not in _LIST_FIELDS:
        raise ValueError(f"Invalid entry kind: {kind} (allowed: {sorted(_LIST_FIELDS)})")
    return _LIST_FIELDS[kind]


def _check_index(items: list, index: int, kind: str) -> None:
    # Negative positions are rejected rather than counted from the end
    if not 0 <= index < len(items):
        raise IndexError(f"No {kind} entry at index {index} ({len(items)} entries)")
