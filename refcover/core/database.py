"""SQLite store for named analyses (raw inputs only)."""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from refcover.analysis.models import SearchTool

logger = logging.getLogger(__name__)

DATA_ROOT = Path("data")
DB_FILENAME = "analyses.db"

# ── Schema DDL ───────────────────────────────────────────────────────

_SCHEMA = """
CREATE TABLE IF NOT EXISTS analyses (
    id                      INTEGER PRIMARY KEY,
    name                    TEXT NOT NULL,
    reference_publications  TEXT NOT NULL DEFAULT '',
    created_at              TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_analyses_created ON analyses(created_at);

CREATE TABLE IF NOT EXISTS search_tools (
    id              INTEGER PRIMARY KEY,
    analysis_id     INTEGER NOT NULL REFERENCES analyses(id),
    name            TEXT NOT NULL DEFAULT '',
    results         TEXT NOT NULL DEFAULT '',
    position        INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_tools_analysis ON search_tools(analysis_id);
"""


# ── AnalysisDatabase ─────────────────────────────────────────────────


class AnalysisDatabase:
    """Saved analyses: reference text plus each tool's name and results.

    Analysis results are not stored; reloading returns the inputs, which
    must be analysed again.
    """

    def __init__(self, data_root: Path | None = None):
        root = data_root or DATA_ROOT
        root.mkdir(parents=True, exist_ok=True)

        self.db_path = root / DB_FILENAME
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    # ── Analyses ─────────────────────────────────────────────

    def save_analysis(
        self, name: str, reference_text: str, tools: list[SearchTool]
    ) -> int:
        """Store an analysis and its tools in order. Returns the analysis id."""
        if not name.strip():
            raise ValueError("Analysis name must not be blank")

        cur = self._conn.execute(
            """INSERT INTO analyses (name, reference_publications, created_at)
               VALUES (?, ?, ?)""",
            (name, reference_text, _now()),
        )
        analysis_id = cur.lastrowid
        self._conn.executemany(
            """INSERT INTO search_tools (analysis_id, name, results, position)
               VALUES (?, ?, ?, ?)""",
            [
                (analysis_id, tool.name, tool.results, position)
                for position, tool in enumerate(tools)
            ],
        )
        self._conn.commit()
        logger.info(
            "Saved analysis %r (id=%d, %d tools)", name, analysis_id, len(tools)
        )
        return analysis_id

    def list_analyses(self) -> list[dict]:
        """All saved analyses, newest first."""
        rows = self._conn.execute(
            "SELECT * FROM analyses ORDER BY created_at DESC, id DESC"
        ).fetchall()
        return [dict(r) for r in rows]

    def load_analysis(self, analysis_id: int) -> tuple[str, list[SearchTool]]:
        """Return (reference text, tools) for a saved analysis."""
        row = self._get_row(analysis_id)
        tools = self._conn.execute(
            "SELECT * FROM search_tools WHERE analysis_id = ? ORDER BY position, id",
            (analysis_id,),
        ).fetchall()
        return row["reference_publications"], [
            SearchTool(id=str(t["id"]), name=t["name"], results=t["results"])
            for t in tools
        ]

    def get_analysis_name(self, analysis_id: int) -> str:
        return self._get_row(analysis_id)["name"]

    def rename_analysis(self, analysis_id: int, new_name: str) -> None:
        if not new_name.strip():
            raise ValueError("Analysis name must not be blank")
        self._get_row(analysis_id)

        self._conn.execute(
            "UPDATE analyses SET name = ? WHERE id = ?", (new_name, analysis_id)
        )
        self._conn.commit()

    def delete_analysis(self, analysis_id: int) -> None:
        """Delete an analysis and the search tools saved with it."""
        self._get_row(analysis_id)

        self._conn.execute(
            "DELETE FROM search_tools WHERE analysis_id = ?", (analysis_id,)
        )
        self._conn.execute("DELETE FROM analyses WHERE id = ?", (analysis_id,))
        self._conn.commit()
        logger.info("Deleted analysis id=%d", analysis_id)

    # ── Cleanup ──────────────────────────────────────────────

    def close(self) -> None:
        self._conn.close()

    # ── Internals ────────────────────────────────────────────

    def _get_row(self, analysis_id: int) -> sqlite3.Row:
        row = self._conn.execute(
            "SELECT * FROM analyses WHERE id = ?", (analysis_id,)
        ).fetchone()
        if row is None:
            raise ValueError(f"Analysis {analysis_id} not found")
        return row


# ── Helpers ──────────────────────────────────────────────────────────


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
