#!/usr/bin/env python3
"""Reference coverage analysis runner."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from refcover.analysis.engine import summarize_results
from refcover.core.analysis_file import load_analysis_file
from refcover.core.database import AnalysisDatabase
from refcover.core.session import AnalysisSession
from refcover.exporters import export_all

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("analysis")


# ── Runner ───────────────────────────────────────────────────────────


def run_analysis(
    input_path: str | None,
    load_id: int | None,
    output_dir: str,
    save: bool = False,
    data_root: str | None = None,
) -> dict:
    """Load inputs, run the analysis, export, and return the summary."""
    t_start = time.time()
    db = AnalysisDatabase(Path(data_root) if data_root else None)

    try:
        if load_id is not None:
            name = db.get_analysis_name(load_id)
            reference_text, tools = db.load_analysis(load_id)
            session = AnalysisSession(reference_text, tools)
            logger.info("Loaded saved analysis %r (id=%d)", name, load_id)
        else:
            analysis = load_analysis_file(input_path)
            name = analysis.name
            session = AnalysisSession.from_analysis_file(analysis)
            logger.info("Loaded analysis file: %s (%s)", input_path, name)

            if save:
                analysis_id = db.save_analysis(name, session.reference_text, session.tools)
                logger.info("Saved inputs as analysis id=%d", analysis_id)

        if not session.can_analyze:
            logger.error("Nothing to analyse: need reference publications and at least one search tool")
            sys.exit(1)

        result = session.analyze()
        summary = summarize_results(result, session.tools)
        paths = export_all(result, session.tools, output_dir)

    except Exception as exc:
        logger.error("Analysis failed: %s", exc, exc_info=True)
        raise
    finally:
        db.close()

    elapsed = time.time() - t_start
    logger.info("=" * 60)
    logger.info("ANALYSIS COMPLETE in %.1fs", elapsed)
    logger.info("Summary: %s", json.dumps(summary, indent=2, ensure_ascii=False))
    for key, path in paths.items():
        logger.info("  %s: %s", key, path)
    return summary


def list_saved(data_root: str | None) -> None:
    db = AnalysisDatabase(Path(data_root) if data_root else None)
    try:
        analyses = db.list_analyses()
    finally:
        db.close()

    if not analyses:
        logger.info("No saved analyses")
        return
    for row in analyses:
        logger.info("  [%d] %s (%s)", row["id"], row["name"], row["created_at"])


# ── CLI ──────────────────────────────────────────────────────────────


def main():
    parser = argparse.ArgumentParser(
        description="Check which reference publications each search tool found"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Path to an analysis YAML file")
    source.add_argument("--load", type=int, help="Id of a saved analysis to rerun")
    source.add_argument("--list", action="store_true", help="List saved analyses")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Store the input file's references and tools in the saved-analyses database",
    )
    parser.add_argument("--output-dir", default="exports", help="Directory for exported files")
    parser.add_argument("--data-root", default=None, help="Directory holding the saved-analyses database")
    args = parser.parse_args()

    if args.list:
        list_saved(args.data_root)
        return

    run_analysis(
        args.input,
        args.load,
        args.output_dir,
        save=args.save,
        data_root=args.data_root,
    )


if __name__ == "__main__":
    main()
