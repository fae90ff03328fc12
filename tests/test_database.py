"""Tests for the saved-analyses SQLite store."""

import pytest

from refcover.analysis.models import SearchTool
from refcover.core.database import AnalysisDatabase

REFS = "Titre complet : Study A\n\nTitre complet : Study B"


@pytest.fixture()
def db(tmp_path):
    """Create a fresh AnalysisDatabase in a temp directory."""
    adb = AnalysisDatabase(data_root=tmp_path)
    yield adb
    adb.close()


def _tools():
    return [
        SearchTool(id="a", name="PubMed", results="Titre complet : Study A"),
        SearchTool(id="b", name="Scopus", results=""),
        SearchTool(id="c", name="Embase", results="Titre complet : Study B"),
    ]


# ── Table Creation ───────────────────────────────────────────────────


def test_tables_exist(db):
    tables = {
        r[0]
        for r in db._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()
    }
    assert {"analyses", "search_tools"}.issubset(tables)


def test_wal_mode(db):
    mode = db._conn.execute("PRAGMA journal_mode").fetchone()[0]
    assert mode == "wal"


# ── Save & Load ──────────────────────────────────────────────────────


def test_save_and_load(db):
    analysis_id = db.save_analysis("Review 1", REFS, _tools())
    reference_text, tools = db.load_analysis(analysis_id)

    assert reference_text == REFS
    assert [(t.name, t.results) for t in tools] == [
        (t.name, t.results) for t in _tools()
    ]
    # Ids come from the store, not the caller's session
    assert all(t.id.isdigit() for t in tools)
    assert len({t.id for t in tools}) == 3


def test_save_blank_name(db):
    with pytest.raises(ValueError):
        db.save_analysis("  ", REFS, [])


def test_save_without_tools(db):
    analysis_id = db.save_analysis("No tools", REFS, [])
    assert db.load_analysis(analysis_id) == (REFS, [])


def test_load_unknown(db):
    with pytest.raises(ValueError):
        db.load_analysis(999)


def test_tools_isolated_per_analysis(db):
    first = db.save_analysis("First", REFS, _tools())
    second = db.save_analysis("Second", "", _tools()[:1])
    assert len(db.load_analysis(first)[1]) == 3
    assert len(db.load_analysis(second)[1]) == 1


# ── Listing ──────────────────────────────────────────────────────────


def test_list_newest_first(db):
    db.save_analysis("Older", REFS, [])
    db.save_analysis("Newer", REFS, [])
    names = [a["name"] for a in db.list_analyses()]
    assert names == ["Newer", "Older"]


def test_list_empty(db):
    assert db.list_analyses() == []


# ── Rename & Delete ──────────────────────────────────────────────────


def test_rename(db):
    analysis_id = db.save_analysis("Draft", REFS, [])
    db.rename_analysis(analysis_id, "Final")
    assert db.get_analysis_name(analysis_id) == "Final"


def test_rename_blank(db):
    analysis_id = db.save_analysis("Draft", REFS, [])
    with pytest.raises(ValueError):
        db.rename_analysis(analysis_id, "")
    assert db.get_analysis_name(analysis_id) == "Draft"


def test_rename_unknown(db):
    with pytest.raises(ValueError):
        db.rename_analysis(42, "Anything")


def test_delete_removes_tools(db):
    analysis_id = db.save_analysis("Doomed", REFS, _tools())
    db.delete_analysis(analysis_id)

    assert db.list_analyses() == []
    remaining = db._conn.execute("SELECT COUNT(*) FROM search_tools").fetchone()[0]
    assert remaining == 0
    with pytest.raises(ValueError):
        db.load_analysis(analysis_id)


def test_reopen_persists(tmp_path):
    first = AnalysisDatabase(data_root=tmp_path)
    analysis_id = first.save_analysis("Kept", REFS, _tools())
    first.close()

    second = AnalysisDatabase(data_root=tmp_path)
    try:
        assert second.load_analysis(analysis_id)[0] == REFS
    finally:
        second.close()
