"""DOCX presence report: one table for references, one for other articles."""

import logging

from docx import Document
from docx.enum.section import WD_ORIENT
from docx.shared import Inches, Pt

from refcover.analysis.models import AnalysisResult, PresenceEntry, SearchTool

logger = logging.getLogger(__name__)

REPORT_TITLE = "Analyse des publications"
REFERENCES_HEADING = "Présence des publications de référence par outil"
OTHERS_HEADING = "Autres articles trouvés (non référencés) par outil"
EMPTY_REFERENCES = "Aucune publication de référence analysée."
EMPTY_OTHERS = "Aucun autre article trouvé."
FOUND = "✓"
MISSING = "✗"


def export_presence_docx(
    result: AnalysisResult, tools: list[SearchTool], output_path: str
) -> None:
    """Export the presence tables as a landscape DOCX report."""
    doc = Document()

    section = doc.sections[0]
    section.orientation = WD_ORIENT.LANDSCAPE
    section.page_width, section.page_height = section.page_height, section.page_width
    section.left_margin = Inches(0.5)
    section.right_margin = Inches(0.5)

    title_para = doc.add_paragraph()
    run = title_para.add_run(REPORT_TITLE)
    run.bold = True
    run.font.size = Pt(14)

    _add_section(doc, REFERENCES_HEADING, EMPTY_REFERENCES, result.reference_presence, tools)
    _add_section(doc, OTHERS_HEADING, EMPTY_OTHERS, result.other_articles, tools)

    doc.save(output_path)
    logger.info(
        "Presence DOCX exported to %s (%d references, %d other articles)",
        output_path,
        len(result.reference_presence),
        len(result.other_articles),
    )


def _add_section(
    doc, heading: str, empty_text: str, entries: list[PresenceEntry], tools: list[SearchTool]
) -> None:
    doc.add_paragraph("")  # spacer
    para = doc.add_paragraph()
    para.add_run(heading).bold = True

    if not entries:
        doc.add_paragraph(empty_text)
        return

    all_cols = ["Publication"] + [tool.name for tool in tools]
    table = doc.add_table(rows=1 + len(entries), cols=len(all_cols))
    table.style = "Table Grid"

    for i, col_name in enumerate(all_cols):
        cell = table.rows[0].cells[i]
        cell.text = col_name
        for paragraph in cell.paragraphs:
            for run in paragraph.runs:
                run.bold = True
                run.font.size = Pt(9)

    for row_idx, entry in enumerate(entries, 1):
        values = [_citation_label(entry)] + [
            FOUND if entry.presence.get(tool.id) else MISSING for tool in tools
        ]
        for col_idx, val in enumerate(values):
            cell = table.rows[row_idx].cells[col_idx]
            cell.text = val
            for paragraph in cell.paragraphs:
                for run in paragraph.runs:
                    run.font.size = Pt(9)


def _citation_label(entry: PresenceEntry) -> str:
    """Title followed by first author et al., year and journal when known."""
    pub = entry.parsed
    details = []
    if pub.authors:
        details.append(f"{pub.authors[0]} et al." if len(pub.authors) > 1 else pub.authors[0])
    if pub.year:
        details.append(pub.year)
    if pub.journal:
        details.append(pub.journal)
    if not details:
        return pub.title
    return f"{pub.title}\n{', '.join(details)}"
