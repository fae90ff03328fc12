"""Presence table export: Excel workbook."""

import logging

import openpyxl
from openpyxl.styles import Font

from refcover.analysis.models import AnalysisResult, SearchTool
from refcover.exporters.presence_csv import (
    OTHER_LABEL,
    REFERENCE_LABEL,
    build_presence_rows,
)

logger = logging.getLogger(__name__)

REFERENCES_SHEET = "Références"
OTHERS_SHEET = "Autres"


def export_presence_excel(
    result: AnalysisResult, tools: list[SearchTool], output_path: str
) -> None:
    """Export the presence table as Excel: one sheet per entry type."""
    headers, rows = build_presence_rows(result, tools)

    wb = openpyxl.Workbook()

    ws1 = wb.active
    ws1.title = REFERENCES_SHEET
    ws1.append(headers)
    for row in rows:
        if row[0] == REFERENCE_LABEL:
            ws1.append(row)
    _style_header(ws1)

    ws2 = wb.create_sheet(OTHERS_SHEET)
    ws2.append(headers)
    for row in rows:
        if row[0] == OTHER_LABEL:
            ws2.append(row)
    _style_header(ws2)

    wb.save(output_path)
    logger.info("Presence Excel exported to %s", output_path)


def _style_header(ws) -> None:
    """Bold the header row."""
    for cell in ws[1]:
        cell.font = Font(bold=True)
