"""Export convenience function."""

import logging
from pathlib import Path

from refcover.analysis.models import AnalysisResult, SearchTool
from refcover.exporters.presence_csv import export_presence_csv
from refcover.exporters.presence_docx import export_presence_docx
from refcover.exporters.presence_excel import export_presence_excel

logger = logging.getLogger(__name__)

EXPORT_STEM = "analyse_publications"


def export_all(
    result: AnalysisResult,
    tools: list[SearchTool],
    output_dir: str,
) -> dict:
    """Run all exports and return dict of file paths created."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    paths = {}

    csv_path = str(out / f"{EXPORT_STEM}.csv")
    export_presence_csv(result, tools, csv_path)
    paths["presence_csv"] = csv_path

    xlsx_path = str(out / f"{EXPORT_STEM}.xlsx")
    export_presence_excel(result, tools, xlsx_path)
    paths["presence_xlsx"] = xlsx_path

    docx_path = str(out / f"{EXPORT_STEM}.docx")
    export_presence_docx(result, tools, docx_path)
    paths["presence_docx"] = docx_path

    logger.info("All exports written to %s", output_dir)
    return paths
