"""
College Leads Hub — Lead Report Formatter
===========================================

Renders a filtered list of leads into downloadable report bytes:
  render_csv()    - CSV with UTF-8 BOM (opens cleanly in Excel)
  render_excel()  - .xlsx workbook: "Student Leads" detail + "Summary" sheets
  render_pdf()    - landscape A4 table with summary header and page footers

generate_report() picks the renderer, names the file and wraps any
library failure in ReportGenerationError. Nothing is written to disk here.

Usage:
    from scripts.leads.report_formatter import generate_report
    report = generate_report("pdf", leads, filters)
    Path(report.filename).write_bytes(report.content)
"""
from __future__ import annotations

import csv
import html
import io
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

import pandas as pd
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from models.contact_models import ContactSubmission, LeadAnalytics, LeadFilters
from scripts.lib.errors import ReportFormatError, ReportGenerationError
from scripts.lib.logger import setup_logger
from scripts.leads.keyword_classifier import lead_priority
from scripts.leads.lead_analytics import compute_lead_analytics

logger = setup_logger("report_formatter")

REPORT_PREFIX = "student-leads-report"
REPORT_TITLE = "Student Leads Report"
FOOTER_TEXT = "College Administration - Student Leads Report"

MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
}
FORMAT_ALIASES = {"excel": "xlsx", "xls": "xlsx"}

DETAIL_COLUMNS = [
    ("Sr. No.", 8),
    ("Date", 12),
    ("Time", 12),
    ("Name", 20),
    ("Email", 25),
    ("Phone", 15),
    ("Subject", 30),
    ("Message", 50),
    ("Status", 10),
    ("Priority", 10),
    ("Reply/Notes", 40),
    ("Replied Date", 15),
]

PDF_COLUMNS = [
    ("Date", 25), ("Name", 35), ("Email", 50), ("Subject", 70),
    ("Status", 20), ("Priority", 20), ("Reply Status", 25),
]
PDF_SUBJECT_MAX = 25
PDF_HEADER_FILL = colors.Color(59 / 255, 130 / 255, 246 / 255)
PDF_STRIPE_FILL = colors.Color(248 / 255, 250 / 255, 252 / 255)


@dataclass
class ReportFile:
    filename: str
    content: bytes
    media_type: str


# ─── Cell formatting ────────────────────────────────────────

def _format_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def _format_time(value: datetime) -> str:
    return value.strftime("%I:%M:%S %p").lstrip("0")


def _format_timestamp(value: datetime) -> str:
    return f"{_format_date(value)}, {_format_time(value)}"


def truncate(text: str, limit: int = PDF_SUBJECT_MAX) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def detail_rows(submissions: Sequence[ContactSubmission]) -> list[list]:
    """One row per lead, in DETAIL_COLUMNS order. Shared by CSV and Excel."""
    rows = []
    for index, lead in enumerate(submissions, start=1):
        rows.append([
            index,
            _format_date(lead.submitted_at),
            _format_time(lead.submitted_at),
            lead.name,
            lead.email,
            lead.phone or "N/A",
            lead.subject,
            lead.message,
            lead.status.upper(),
            lead_priority(lead).upper(),
            lead.admin_notes or "No reply/notes",
            _format_date(lead.replied_at) if lead.replied_at else "Not replied",
        ])
    return rows


def summary_rows(
    submissions: Sequence[ContactSubmission],
    filters: LeadFilters,
    generated_at: datetime,
    analytics: Optional[LeadAnalytics] = None,
) -> list[tuple[str, object]]:
    """Metric/value pairs for the workbook summary sheet."""
    stats = analytics or compute_lead_analytics(submissions, now=generated_at)
    return [
        ("Report Generation Date", _format_timestamp(generated_at)),
        ("", ""),
        ("FILTER INFORMATION", ""),
        ("Date Range", filters.date_range_label() or "All dates"),
        ("Subject Filter", filters.subject or "All subjects"),
        ("Status Filter", filters.status or "All statuses"),
        ("", ""),
        ("SUMMARY STATISTICS", ""),
        ("Total Leads", stats.total_leads),
        ("New Leads", stats.new_leads),
        ("Potential Students", stats.potential_students),
        ("Conversion Rate", f"{stats.conversion_rate}%"),
        ("Response Rate", f"{stats.response_rate}%"),
        ("", ""),
        ("PRIORITY BREAKDOWN", ""),
        ("High Priority", stats.priority_breakdown["high"]),
        ("Medium Priority", stats.priority_breakdown["medium"]),
        ("Low Priority", stats.priority_breakdown["low"]),
        ("", ""),
        ("STATUS BREAKDOWN", ""),
        ("New", stats.status_breakdown["new"]),
        ("Read", stats.status_breakdown["read"]),
        ("Replied", stats.status_breakdown["replied"]),
        ("Archived", stats.status_breakdown["archived"]),
    ]


# ─── CSV ────────────────────────────────────────────────────

def render_csv(submissions: Sequence[ContactSubmission]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow([name for name, _ in DETAIL_COLUMNS])
    writer.writerows(detail_rows(submissions))
    return buffer.getvalue().encode("utf-8-sig")


# ─── Excel ──────────────────────────────────────────────────

def render_excel(
    submissions: Sequence[ContactSubmission],
    filters: LeadFilters,
    generated_at: Optional[datetime] = None,
) -> bytes:
    generated_at = generated_at or datetime.now(timezone.utc)
    columns = [name for name, _ in DETAIL_COLUMNS]
    details = pd.DataFrame(detail_rows(submissions), columns=columns)
    summary = pd.DataFrame(
        summary_rows(submissions, filters, generated_at), columns=["Metric", "Value"],
    )

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        details.to_excel(writer, sheet_name="Student Leads", index=False)
        summary.to_excel(writer, sheet_name="Summary", index=False)

        sheet = writer.sheets["Student Leads"]
        for idx, (_, width) in enumerate(DETAIL_COLUMNS, start=1):
            sheet.column_dimensions[get_column_letter(idx)].width = width
        summary_sheet = writer.sheets["Summary"]
        summary_sheet.column_dimensions["A"].width = 28
        summary_sheet.column_dimensions["B"].width = 30

        for ws in (sheet, summary_sheet):
            _store_text_as_strings(ws)

    return output.getvalue()


def _store_text_as_strings(worksheet) -> None:
    """openpyxl turns any string starting with "=" into a formula; keep it literal."""
    for row in worksheet.iter_rows():
        for cell in row:
            if isinstance(cell.value, str) and cell.data_type == "f":
                cell.data_type = "s"


# ─── PDF ────────────────────────────────────────────────────

class _NumberedCanvas(canvas.Canvas):
    """Canvas that stamps "Page i of n" once the page count is known."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._page_states = []

    def showPage(self):
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._page_states)
        for state in self._page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.drawString(20 * mm, 10 * mm, FOOTER_TEXT)
        self.drawRightString(
            width - 20 * mm, 10 * mm, f"Page {self.getPageNumber()} of {total}",
        )


def _pdf_table(submissions: Sequence[ContactSubmission]) -> Table:
    data = [[name for name, _ in PDF_COLUMNS]]
    for lead in submissions:
        data.append([
            _format_date(lead.submitted_at),
            lead.name,
            lead.email,
            truncate(lead.subject),
            lead.status.upper(),
            lead_priority(lead).upper(),
            "Replied" if lead.replied_at else "Pending",
        ])

    table = Table(data, colWidths=[w * mm for _, w in PDF_COLUMNS], repeatRows=1)
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("BACKGROUND", (0, 0), (-1, 0), PDF_HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, PDF_STRIPE_FILL]),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return table


def render_pdf(
    submissions: Sequence[ContactSubmission],
    filters: LeadFilters,
    generated_at: Optional[datetime] = None,
) -> bytes:
    generated_at = generated_at or datetime.now(timezone.utc)
    stats = compute_lead_analytics(submissions, now=generated_at)
    styles = getSampleStyleSheet()

    story = [
        Paragraph(REPORT_TITLE, styles["Title"]),
        Paragraph(f"Generated on: {_format_timestamp(generated_at)}", styles["Normal"]),
        Spacer(1, 6 * mm),
        Paragraph("Filters Applied:", styles["Heading3"]),
    ]
    filter_lines = filters.describe() or ["None (all leads)"]
    story.extend(Paragraph(html.escape(line), styles["Normal"]) for line in filter_lines)
    story += [
        Spacer(1, 4 * mm),
        Paragraph("Summary Statistics:", styles["Heading3"]),
        Paragraph(
            f"Total Leads: {stats.total_leads} &nbsp;&nbsp; "
            f"New Leads: {stats.new_leads} &nbsp;&nbsp; "
            f"Potential Students: {stats.potential_students} &nbsp;&nbsp; "
            f"Conversion Rate: {stats.conversion_rate}%",
            styles["Normal"],
        ),
        Spacer(1, 6 * mm),
        _pdf_table(submissions),
    ]

    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=landscape(A4),
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=20 * mm,
        title=REPORT_TITLE,
    )
    doc.build(story, canvasmaker=_NumberedCanvas)
    return output.getvalue()


# ─── Entry point ────────────────────────────────────────────

def normalize_format(fmt: str) -> str:
    key = (fmt or "").strip().lower()
    key = FORMAT_ALIASES.get(key, key)
    if key not in MEDIA_TYPES:
        raise ReportFormatError(fmt)
    return key


def report_filename(fmt: str, now: Optional[datetime] = None) -> str:
    """student-leads-report-<YYYY-MM-DDTHH-MM-SS>.<ext>"""
    now = now or datetime.now(timezone.utc)
    timestamp = now.strftime("%Y-%m-%dT%H:%M:%S").replace(":", "-")
    return f"{REPORT_PREFIX}-{timestamp}.{fmt}"


def generate_report(
    fmt: str,
    submissions: Sequence[ContactSubmission],
    filters: Optional[LeadFilters] = None,
    now: Optional[datetime] = None,
) -> ReportFile:
    """
    Render a lead report.

    Raises:
        ReportFormatError: fmt is not csv, xlsx or pdf.
        ReportGenerationError: the formatting library failed.
    """
    fmt = normalize_format(fmt)
    filters = filters or LeadFilters()
    now = now or datetime.now(timezone.utc)

    try:
        if fmt == "csv":
            content = render_csv(submissions)
        elif fmt == "xlsx":
            content = render_excel(submissions, filters, generated_at=now)
        else:
            content = render_pdf(submissions, filters, generated_at=now)
    except Exception as e:
        logger.error("Error generating %s report: %s", fmt.upper(), e)
        raise ReportGenerationError(fmt, e) from e

    filename = report_filename(fmt, now)
    logger.info("%s report generated: %s (%d leads)", fmt.upper(), filename, len(submissions))
    return ReportFile(filename=filename, content=content, media_type=MEDIA_TYPES[fmt])
