"""Title normalization and per-tool title matching."""

import re

from refcover.analysis.models import SearchTool
from refcover.parsers.record_parser import parse_publication
from refcover.parsers.segmenter import split_publications

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize_title(title: str) -> str:
    """Lowercase and keep only ASCII letters and digits.

    Accented letters and other non-ASCII characters are dropped, not
    transliterated. The result is an exact-match key.
    """
    return _NON_ALNUM_RE.sub("", title.lower()).strip()


def record_key(record: str) -> str:
    """Normalized title of a raw record."""
    return normalize_title(parse_publication(record).title)


def title_keys(results_text: str) -> set[str]:
    """Normalized titles of every record in a tool's pasted results."""
    return {record_key(record) for record in split_publications(results_text)}


def tool_title_keys(tools: list[SearchTool]) -> dict[str, set[str]]:
    """Map each tool id to the title keys found in its results."""
    return {tool.id: title_keys(tool.results) for tool in tools}


def presence_for(
    key: str,
    tools: list[SearchTool],
    keys_by_tool: dict[str, set[str]],
) -> dict[str, bool]:
    """Whether each tool, in order, returned a record with this title key."""
    return {tool.id: key in keys_by_tool[tool.id] for tool in tools}
