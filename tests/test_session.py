"""Tests for the caller-owned analysis session."""

from pathlib import Path

import pytest

from refcover.core.analysis_file import load_analysis_file
from refcover.core.session import AnalysisSession
from refcover.parsers.models import ParsedPublication

EXAMPLE_PATH = Path(__file__).resolve().parent.parent / "analyses" / "example_analysis.yaml"


@pytest.fixture()
def session():
    s = AnalysisSession("Titre complet : Study A\n\nTitre complet : Study B")
    s.add_tool("PubMed", "Titre complet : Study A\n\nTitre complet : Study X")
    s.add_tool("Scopus", "Titre complet : Study B")
    s.add_tool("Embase", "")
    return s


def _names(s):
    return [t.name for t in s.tools]


# ── Search Tools ─────────────────────────────────────────────────────


def test_add_tool_defaults_and_unique_ids():
    s = AnalysisSession()
    a = s.add_tool()
    b = s.add_tool()
    assert a.name == "" and a.results == ""
    assert a.id != b.id
    assert s.tools == [a, b]


def test_remove_tool(session):
    scopus = session.tools[1]
    session.remove_tool(scopus.id)
    assert _names(session) == ["PubMed", "Embase"]


def test_remove_unknown_tool(session):
    with pytest.raises(ValueError):
        session.remove_tool("missing")


def test_update_tool(session):
    tool_id = session.tools[2].id
    session.update_tool(tool_id, "name", "Embase (Elsevier)")
    session.update_tool(tool_id, "results", "Titre complet : Study B")
    assert session.tools[2].name == "Embase (Elsevier)"
    assert session.tools[2].results == "Titre complet : Study B"
    assert session.tools[2].id == tool_id


def test_update_tool_invalid_field(session):
    with pytest.raises(ValueError):
        session.update_tool(session.tools[0].id, "id", "x")


def test_move_tool_forward(session):
    pubmed, _, embase = session.tools
    session.move_tool(pubmed.id, embase.id)
    assert _names(session) == ["Scopus", "Embase", "PubMed"]


def test_move_tool_backward(session):
    pubmed, _, embase = session.tools
    session.move_tool(embase.id, pubmed.id)
    assert _names(session) == ["Embase", "PubMed", "Scopus"]


def test_move_tool_onto_itself(session):
    session.move_tool(session.tools[1].id, session.tools[1].id)
    assert _names(session) == ["PubMed", "Scopus", "Embase"]


# ── Analysis ─────────────────────────────────────────────────────────


def test_parsed_references(session):
    assert [p.title for p in session.parsed_references] == ["Study A", "Study B"]


def test_can_analyze():
    s = AnalysisSession()
    assert not s.can_analyze
    s.reference_text = "Titre complet : A"
    assert not s.can_analyze
    s.add_tool("PubMed")
    assert s.can_analyze


def test_analyze_uses_tool_order(session):
    result = session.analyze()
    ids = [t.id for t in session.tools]
    assert list(result.reference_presence[0].presence) == ids
    assert [result.reference_presence[i].presence[ids[1]] for i in (0, 1)] == [False, True]
    assert [e.parsed.title for e in result.other_articles] == ["Study X"]
    assert session.result is result


def test_edit_entry(session):
    session.analyze()
    session.edit_entry("other", 0, ParsedPublication(title="Study X, 2nd ed."))
    assert session.result.other_articles[0].parsed.title == "Study X, 2nd ed."


def test_edit_requires_result(session):
    with pytest.raises(ValueError):
        session.edit_entry("reference", 0, ParsedPublication(title="X"))


def test_delete_reference_updates_text(session):
    session.analyze()
    session.delete_entry("reference", 0)
    assert session.reference_text == "Titre complet : Study B"
    assert [e.parsed.title for e in session.result.reference_presence] == ["Study B"]


def test_delete_reference_before_analysis(session):
    session.delete_entry("reference", 1)
    assert session.reference_text == "Titre complet : Study A"
    assert session.result is None


def test_delete_other_article_keeps_text(session):
    session.analyze()
    before = session.reference_text
    session.delete_entry("other", 0)
    assert session.result.other_articles == []
    assert session.reference_text == before


def test_delete_invalid_kind(session):
    session.analyze()
    with pytest.raises(ValueError):
        session.delete_entry("tool", 0)


# ── Analysis Files ───────────────────────────────────────────────────


def test_from_analysis_file():
    s = AnalysisSession.from_analysis_file(load_analysis_file(EXAMPLE_PATH))
    assert _names(s) == ["PubMed", "OpenAlex", "Semantic Scholar"]
    assert len(s.parsed_references) == 3


def test_to_analysis_file(session):
    af = session.to_analysis_file("My review")
    assert af.name == "My review"
    assert af.reference_publications == session.reference_text
    assert [t.name for t in af.search_tools] == ["PubMed", "Scopus", "Embase"]


def test_edit_entry_from_form(session):
    session.analyze()
    session.edit_entry_from_form(
        "reference", 1, "Study B", authors_text="Doe J\nLee C", doi="10.1000/b1"
    )
    parsed = session.result.reference_presence[1].parsed
    assert parsed.authors == ["Doe J", "Lee C"]
    assert parsed.doi == "10.1000/b1"
    assert parsed.year is None
