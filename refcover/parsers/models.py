"""Shared data models for parsers."""

from typing import Optional

from pydantic import BaseModel, Field

DOI_RESOLVER = "https://doi.org/"


class ParsedPublication(BaseModel):
    """Structured fields extracted from one pasted publication record."""

    title: str
    authors: list[str] = Field(default_factory=list)
    year: Optional[str] = None
    journal: Optional[str] = None
    doi: Optional[str] = None

    @property
    def doi_url(self) -> Optional[str]:
        if not self.doi:
            return None
        return f"{DOI_RESOLVER}{self.doi}"
