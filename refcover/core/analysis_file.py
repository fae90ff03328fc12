"""Analysis files: YAML inputs for one reference-coverage analysis."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from refcover.analysis.models import SearchTool


# ── Search Tool Inputs ───────────────────────────────────────────────


class ToolInput(BaseModel):
    """One search tool's name and pasted results, as stored on disk."""

    name: str = ""
    results: str = ""


# ── Analysis File (top-level) ────────────────────────────────────────


class AnalysisFile(BaseModel):
    """Raw inputs of a named analysis. Computed results are never stored."""

    name: str
    reference_publications: str = ""
    search_tools: list[ToolInput] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Analysis name must not be blank")
        return v

    def to_tools(self) -> list[SearchTool]:
        """SearchTools with positional ids (``tool-1``, ``tool-2``, ...)."""
        return [
            SearchTool(id=f"tool-{i}", name=t.name, results=t.results)
            for i, t in enumerate(self.search_tools, 1)
        ]

    @classmethod
    def from_tools(
        cls, name: str, reference_text: str, tools: list[SearchTool]
    ) -> "AnalysisFile":
        return cls(
            name=name,
            reference_publications=reference_text,
            search_tools=[ToolInput(name=t.name, results=t.results) for t in tools],
        )


# ── Helpers ──────────────────────────────────────────────────────────


def load_analysis_file(path: str | Path) -> AnalysisFile:
    """Load a YAML analysis file from disk and return a validated model."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return AnalysisFile.model_validate(raw)


def save_analysis_file(analysis: AnalysisFile, path: str | Path) -> None:
    """Write an analysis file as YAML, keeping multi-line text readable."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(
            analysis.model_dump(),
            f,
            Dumper=_LiteralDumper,
            allow_unicode=True,
            sort_keys=False,
        )


class _LiteralDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as ``|`` blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str):
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_LiteralDumper.add_representer(str, _represent_str)
