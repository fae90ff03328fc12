"""Split pasted bibliographic text into individual publication records."""

import re

_BLANK_LINE_RE = re.compile(r"\n\s*\n")

RECORD_SEPARATOR = "\n\n"


def split_publications(text: str) -> list[str]:
    """Split on blank lines, dropping whitespace-only segments.

    Retained segments are returned untrimmed; the record parser trims
    line by line.
    """
    return [chunk for chunk in _BLANK_LINE_RE.split(text) if chunk.strip()]


def join_publications(records: list[str]) -> str:
    """Rebuild a text block from records, one blank line between each."""
    return RECORD_SEPARATOR.join(records)
