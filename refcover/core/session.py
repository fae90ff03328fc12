"""Caller-owned state for one interactive analysis."""

import uuid

from refcover.analysis.editing import (
    delete_other_article,
    delete_reference,
    edit_entry,
    publication_from_form,
)
from refcover.analysis.engine import analyze_results
from refcover.analysis.models import AnalysisResult, EntryKind, SearchTool
from refcover.core.analysis_file import AnalysisFile
from refcover.parsers.models import ParsedPublication
from refcover.parsers.record_parser import parse_publication
from refcover.parsers.segmenter import split_publications

TOOL_FIELDS = ("name", "results")


class AnalysisSession:
    """Reference text, ordered search tools, and the latest result.

    The analysis functions are stateless; this object is where a front end
    keeps what the user has entered between runs.
    """

    def __init__(
        self,
        reference_text: str = "",
        tools: list[SearchTool] | None = None,
    ):
        self.reference_text = reference_text
        self.tools: list[SearchTool] = list(tools or [])
        self.result: AnalysisResult | None = None

    # ── References ───────────────────────────────────────────

    @property
    def parsed_references(self) -> list[ParsedPublication]:
        """Parse preview of the current reference text."""
        return [parse_publication(r) for r in split_publications(self.reference_text)]

    # ── Search Tools ─────────────────────────────────────────

    def add_tool(self, name: str = "", results: str = "") -> SearchTool:
        tool = SearchTool(id=uuid.uuid4().hex, name=name, results=results)
        self.tools.append(tool)
        return tool

    def remove_tool(self, tool_id: str) -> None:
        self._index_of(tool_id)
        self.tools = [t for t in self.tools if t.id != tool_id]

    def update_tool(self, tool_id: str, field: str, value: str) -> SearchTool:
        """Set a tool's ``name`` or ``results``."""
        if field not in TOOL_FIELDS:
            raise ValueError(f"Invalid tool field: {field} (allowed: {TOOL_FIELDS})")
        idx = self._index_of(tool_id)
        updated = self.tools[idx].model_copy(update={field: value})
        self.tools[idx] = updated
        return updated

    def move_tool(self, dragged_id: str, target_id: str) -> None:
        """Move a tool to the position currently held by another tool."""
        if dragged_id == target_id:
            return
        dragged_idx = self._index_of(dragged_id)
        target_idx = self._index_of(target_id)
        tool = self.tools.pop(dragged_idx)
        self.tools.insert(target_idx, tool)

    # ── Analysis ─────────────────────────────────────────────

    @property
    def can_analyze(self) -> bool:
        return bool(self.reference_text) and len(self.tools) > 0

    def analyze(self) -> AnalysisResult:
        self.result = analyze_results(self.reference_text, self.tools)
        return self.result

    def edit_entry(self, kind: EntryKind, index: int, parsed: ParsedPublication) -> None:
        self.result = edit_entry(self._require_result(), kind, index, parsed)

    def edit_entry_from_form(
        self,
        kind: EntryKind,
        index: int,
        title: str,
        authors_text: str = "",
        year: str = "",
        journal: str = "",
        doi: str = "",
    ) -> None:
        """Apply an edit made in a form, with authors one per line."""
        self.edit_entry(
            kind, index, publication_from_form(title, authors_text, year, journal, doi)
        )

    def delete_entry(self, kind: EntryKind, index: int) -> None:
        """Delete by position; a reference is also removed from the raw text."""
        if kind == "reference":
            self.reference_text, self.result = delete_reference(
                self.reference_text, self.result, index
            )
        elif kind == "other":
            self.result = delete_other_article(self._require_result(), index)
        else:
            raise ValueError(f"Invalid entry kind: {kind}")

    # ── Analysis Files ───────────────────────────────────────

    @classmethod
    def from_analysis_file(cls, analysis: AnalysisFile) -> "AnalysisSession":
        return cls(analysis.reference_publications, analysis.to_tools())

    def to_analysis_file(self, name: str) -> AnalysisFile:
        return AnalysisFile.from_tools(name, self.reference_text, self.tools)

    # ── Internals ────────────────────────────────────────────

    def _index_of(self, tool_id: str) -> int:
        for idx, tool in enumerate(self.tools):
            if tool.id == tool_id:
                return idx
        raise ValueError(f"Search tool {tool_id} not found")

    def _require_result(self) -> AnalysisResult:
        if self.result is None:
            raise ValueError("No analysis result yet; run analyze() first")
        return self.result
