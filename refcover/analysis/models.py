"""Shared data models for presence analysis."""

from typing import Literal

from pydantic import BaseModel, Field

from refcover.parsers.models import ParsedPublication

EntryKind = Literal["reference", "other"]


class SearchTool(BaseModel):
    """A named search source and the raw results pasted for it."""

    id: str
    name: str = ""
    results: str = ""


class PresenceEntry(BaseModel):
    """One analysed record and whether each tool returned it."""

    original_text: str
    parsed: ParsedPublication
    presence: dict[str, bool] = Field(
        default_factory=dict, description="SearchTool.id -> found"
    )


class ReferenceEntry(PresenceEntry):
    """A reference publication's row in the presence table."""


class OtherEntry(PresenceEntry):
    """A tool-returned record that matches no reference."""


class AnalysisResult(BaseModel):
    """Presence matrix for references plus the merged other articles."""

    reference_presence: list[ReferenceEntry] = Field(default_factory=list)
    other_articles: list[OtherEntry] = Field(default_factory=list)
