"""Serialize lead results into downloadable CSV, PDF and Excel files.

All exporters take the dictionaries produced by ``ScoredLead.to_dict`` (which
is also what the dashboard posts back), so they work the same for the web
export route and the CLI job.
"""

import csv
import io
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence
from xml.sax.saxutils import escape

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

logger = logging.getLogger(__name__)

TITLE = "Lead Dashboard - Export"
CSV_HEADERS = ["Name", "Address", "Phone", "Rating", "Reviews", "Website", "Google Maps", "Lead Score", "Lead Label"]
PDF_HEADERS = ["Name", "Address", "Phone", "Rating", "Reviews", "Website", "Score"]
NA = "N/A"

CONTENT_TYPES = {
    "csv": "text/csv",
    "pdf": "application/pdf",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class ExportError(ValueError):
    """Raised when there is nothing to export or the format is unknown."""


def select_rows(results: Iterable[Dict[str, Any]], selected_ids: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
    """Keep the selected results; an empty selection means all of them."""
    results = [r for r in results or [] if isinstance(r, dict)]
    selected = {i for i in selected_ids or [] if isinstance(i, str)}
    if not selected:
        return results
    return [r for r in results if r.get("id") in selected]


def _or_na(value: Any) -> Any:
    return NA if value is None or value == "" else value


def to_csv(rows: Sequence[Dict[str, Any]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(
            [
                row.get("name", ""),
                row.get("address", ""),
                row.get("phone", ""),
                "" if row.get("rating") is None else row["rating"],
                "" if row.get("review_count") is None else row["review_count"],
                row.get("website", ""),
                row.get("maps_url", ""),
                row.get("lead_score", ""),
                row.get("lead_label", ""),
            ]
        )
    return buffer.getvalue().encode("utf-8")


def to_xlsx(rows: Sequence[Dict[str, Any]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Leads"
    ws.append(CSV_HEADERS)

    header_fill = PatternFill(start_color="171717", end_color="171717", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font

    for row in rows:
        ws.append(
            [
                row.get("name", ""),
                row.get("address", ""),
                row.get("phone", ""),
                _or_na(row.get("rating")),
                _or_na(row.get("review_count")),
                _or_na(row.get("website")),
                row.get("maps_url", ""),
                row.get("lead_score", ""),
                row.get("lead_label", ""),
            ]
        )

    for column, width in zip("ABCDEFGHI", (32, 40, 18, 8, 9, 32, 40, 11, 11)):
        ws.column_dimensions[column].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def to_pdf(rows: Sequence[Dict[str, Any]], location: str = "", industries: Sequence[str] = ()) -> bytes:
    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"].clone("LeadCell", fontSize=7, leading=8)

    industry_text = ", ".join(industries) if industries else "all"
    subtitle = f"Location: {location or NA} | Industries: {industry_text} | {len(rows)} results"

    body = [[Paragraph(h, cell_style) for h in PDF_HEADERS]]
    for row in rows:
        values = [
            row.get("name", ""),
            row.get("address", ""),
            row.get("phone", ""),
            _or_na(row.get("rating")),
            _or_na(row.get("review_count")),
            _or_na(row.get("website")),
            f"{row.get('lead_score', '')} {row.get('lead_label', '')}".strip(),
        ]
        body.append([Paragraph(escape(str(v)), cell_style) for v in values])

    table = Table(body, repeatRows=1, colWidths=[130, 170, 80, 40, 45, 180, 55])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#171717")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )

    output = io.BytesIO()
    doc = SimpleDocTemplate(output, pagesize=landscape(letter), title=TITLE, leftMargin=28, rightMargin=28)
    doc.build([Paragraph(TITLE, styles["Title"]), Paragraph(escape(subtitle), styles["Normal"]), Spacer(1, 8), table])
    return output.getvalue()


def export_results(
    fmt: str,
    results: Iterable[Dict[str, Any]],
    selected_ids: Optional[Iterable[str]] = None,
    location: str = "",
    industries: Sequence[str] = (),
) -> bytes:
    """Render the selected results in ``fmt`` (csv, pdf or xlsx)."""
    if fmt not in CONTENT_TYPES:
        raise ExportError(f"unsupported export format: {fmt}")
    rows = select_rows(results, selected_ids)
    if not rows:
        raise ExportError("no results to export")

    logger.info("Exporting %d leads as %s", len(rows), fmt)
    if fmt == "csv":
        return to_csv(rows)
    if fmt == "xlsx":
        return to_xlsx(rows)
    return to_pdf(rows, location=location, industries=industries)
