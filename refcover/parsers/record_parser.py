"""Line-prefix parser for pasted publication records.

Records are exported by bibliographic tools as labelled lines, e.g.::

    Titre complet : Example Study
    Auteurs : Jane Doe, John Smith
    Date de publication : 12 March 2021
    Journal : Nature
    DOI : 10.1000/xyz123

Each line is matched against a fixed, ordered table of labels. Lines with
no known label are ignored.
"""

import re
from typing import Callable

from refcover.parsers.models import ParsedPublication

UNTITLED = "Sans titre"

AUTHORS_PREFIX = "Auteurs :"
DATE_PREFIX = "Date de publication :"
TITLE_PREFIX = "Titre complet :"
JOURNAL_PREFIX = "Journal :"
DOI_PREFIX = "DOI :"

# Substrings marking collective authorship ("XYZ Study Group", "... Investigators")
GROUP_AUTHOR_MARKERS = ("Study Group", "Investigators")

# DOI fields sometimes carry a PubMed identifier instead
PMID_MARKER = "PMID:"

_AUTHOR_SEP_RE = re.compile(r"[,;]")
_YEAR_RE = re.compile(r"\b(19|20)\d{2}\b", re.ASCII)
# ASCII word boundaries; the DOI suffix also stops at the Unicode spaces (NBSP etc.)
_DOI_RE = re.compile(
    r"\b(10\.\d{4,}(?:\.\d+)*/"
    r"[^.\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+)\b",
    re.ASCII,
)


# ── Field Handlers ───────────────────────────────────────────────────


def _set_authors(fields: dict, value: str) -> None:
    # A later author line replaces an earlier one
    fields["authors"] = [
        author
        for author in (piece.strip() for piece in _AUTHOR_SEP_RE.split(value))
        if author and not _is_group_author(author)
    ]


def _set_year(fields: dict, value: str) -> None:
    match = _YEAR_RE.search(value)
    if match:
        fields["year"] = match.group(0)


def _set_title(fields: dict, value: str) -> None:
    fields["title"] = value


def _set_journal(fields: dict, value: str) -> None:
    fields["journal"] = value


def _set_doi(fields: dict, value: str) -> None:
    fields["doi"] = extract_doi(value)


_FIELD_HANDLERS: tuple[tuple[str, Callable[[dict, str], None]], ...] = (
    (AUTHORS_PREFIX, _set_authors),
    (DATE_PREFIX, _set_year),
    (TITLE_PREFIX, _set_title),
    (JOURNAL_PREFIX, _set_journal),
    (DOI_PREFIX, _set_doi),
)


# ── Public API ───────────────────────────────────────────────────────


def parse_publication(text: str) -> ParsedPublication:
    """Parse one record into a ParsedPublication.

    Never fails: missing fields stay unset and a missing title falls back
    to the ``UNTITLED`` placeholder.
    """
    fields: dict = {"title": "", "authors": []}

    for line in _content_lines(text):
        for prefix, handler in _FIELD_HANDLERS:
            if line.startswith(prefix):
                handler(fields, line[len(prefix):].strip())
                break

    fields["title"] = fields["title"] or UNTITLED
    return ParsedPublication(**fields)


def extract_doi(value: str) -> str:
    """Narrow a DOI field to the bare DOI when one can be found.

    PMID-tagged values and values with no recognizable DOI are returned
    unchanged.
    """
    if value.startswith(PMID_MARKER):
        return value
    match = _DOI_RE.search(value)
    return match.group(1) if match else value


def parse_authors_lines(text: str) -> list[str]:
    """Read an author list written one name per line."""
    return [line.strip() for line in text.split("\n") if line.strip()]


# ── Helpers ──────────────────────────────────────────────────────────


def _content_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def _is_group_author(author: str) -> bool:
    return any(marker in author for marker in GROUP_AUTHOR_MARKERS)
