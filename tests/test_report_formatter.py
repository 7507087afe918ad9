"""Tests for the lead report formatter."""

import csv
import io
import re
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

from factories import NOW, make_lead
from models.contact_models import LeadFilters
from scripts.lib.errors import ReportFormatError, ReportGenerationError
from scripts.leads.report_formatter import (
    generate_report,
    render_csv,
    render_excel,
    render_pdf,
    report_filename,
    truncate,
)


def _leads():
    return [
        make_lead(id="1", name='Priya "PJ" Joshi', email="priya@example.com",
                  subject='Admission "2025" intake, CSE',
                  message="Line one\nLine two, with comma", status="new"),
        make_lead(id="2", name="Karan Singh", email="karan@example.com",
                  subject="Hostel", message="Is there a gym?", status="replied",
                  phone="+91 98765 43210", replied_at=datetime(2025, 6, 14, tzinfo=timezone.utc),
                  admin_notes="Shared the hostel brochure"),
    ]


def _parse_csv(content: bytes):
    text = content.decode("utf-8-sig")
    return list(csv.DictReader(io.StringIO(text)))


class TestCsv:
    def test_starts_with_bom(self):
        assert render_csv(_leads()).startswith(b"\xef\xbb\xbf")

    def test_round_trip_preserves_fields(self):
        leads = _leads()
        rows = _parse_csv(render_csv(leads))

        parsed = {(r["Name"], r["Email"], r["Subject"], r["Status"].lower()) for r in rows}
        expected = {(l.name, l.email, l.subject, l.status) for l in leads}
        assert parsed == expected

    def test_embedded_quotes_are_doubled(self):
        content = render_csv(_leads()).decode("utf-8-sig")
        assert '"Priya ""PJ"" Joshi"' in content

    def test_derived_columns(self):
        first, second = _parse_csv(render_csv(_leads()))
        assert first["Sr. No."] == "1"
        assert first["Phone"] == "N/A"
        assert first["Priority"] == "HIGH"
        assert first["Reply/Notes"] == "No reply/notes"
        assert first["Replied Date"] == "Not replied"
        assert second["Replied Date"] == "6/14/2025"
        assert second["Priority"] == "LOW"
        assert second["Message"] == "Is there a gym?"

    def test_empty_list_has_header_only(self):
        rows = _parse_csv(render_csv([]))
        assert rows == []


class TestExcel:
    def test_sheets_and_content(self):
        filters = LeadFilters.from_query("2025-06-01", "2025-06-15", "admission", "new")
        workbook = load_workbook(io.BytesIO(render_excel(_leads(), filters, generated_at=NOW)))

        assert workbook.sheetnames == ["Student Leads", "Summary"]

        detail = workbook["Student Leads"]
        header = [c.value for c in detail[1]]
        assert header[:4] == ["Sr. No.", "Date", "Time", "Name"]
        assert detail.max_row == 3
        assert detail["D2"].value == 'Priya "PJ" Joshi'

        summary = {row[0]: row[1] for row in workbook["Summary"].iter_rows(min_row=2, values_only=True)}
        assert summary["Date Range"] == "2025-06-01 to 2025-06-15"
        assert summary["Subject Filter"] == "admission"
        assert summary["Status Filter"] == "new"
        assert summary["Total Leads"] == 2
        assert summary["High Priority"] == 1
        assert summary["Low Priority"] == 1
        assert summary["Replied"] == 1

    def test_formula_like_text_stays_literal(self):
        lead = make_lead(name='=HYPERLINK("http://evil.example","click")', subject="=1+1")
        workbook = load_workbook(io.BytesIO(
            render_excel([lead], LeadFilters(subject="=SUM(A1)"), generated_at=NOW)
        ))

        detail = workbook["Student Leads"]
        assert detail["D2"].data_type == "s"
        assert detail["D2"].value == '=HYPERLINK("http://evil.example","click")'
        assert detail["G2"].data_type == "s"
        assert detail["G2"].value == "=1+1"

        summary = {row[0].value: row[1] for row in workbook["Summary"].iter_rows(min_row=2)}
        assert summary["Subject Filter"].data_type == "s"
        assert summary["Subject Filter"].value == "=SUM(A1)"

    def test_summary_defaults_without_filters(self):
        workbook = load_workbook(io.BytesIO(render_excel([], LeadFilters(), generated_at=NOW)))
        summary = {row[0]: row[1] for row in workbook["Summary"].iter_rows(min_row=2, values_only=True)}
        assert summary["Date Range"] == "All dates"
        assert summary["Status Filter"] == "All statuses"
        assert summary["Conversion Rate"] == "0.0%"


class TestPdf:
    def test_renders_pdf_bytes(self):
        content = render_pdf(_leads(), LeadFilters(subject="admission"), generated_at=NOW)
        assert content.startswith(b"%PDF")

    def test_many_rows_paginate(self):
        leads = [make_lead(id=str(i)) for i in range(120)]
        content = render_pdf(leads, LeadFilters(), generated_at=NOW)
        pages = re.findall(rb"/Type /Page\b(?!s)", content)
        assert len(pages) >= 2

    def test_empty_list(self):
        assert render_pdf([], LeadFilters(), generated_at=NOW).startswith(b"%PDF")

    def test_truncate(self):
        assert truncate("Short subject") == "Short subject"
        assert truncate("A" * 30) == "A" * 25 + "..."


class TestGenerateReport:
    def test_filename_format(self):
        now = datetime(2025, 6, 15, 8, 5, 9, tzinfo=timezone.utc)
        assert report_filename("csv", now) == "student-leads-report-2025-06-15T08-05-09.csv"

    @pytest.mark.parametrize("fmt,ext,media", [
        ("csv", "csv", "text/csv; charset=utf-8"),
        ("XLSX", "xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        ("excel", "xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        ("pdf", "pdf", "application/pdf"),
    ])
    def test_formats(self, fmt, ext, media):
        report = generate_report(fmt, _leads(), LeadFilters(), now=NOW)
        assert report.filename.endswith(f".{ext}")
        assert ":" not in report.filename
        assert report.media_type == media
        assert report.content

    def test_unknown_format(self):
        with pytest.raises(ReportFormatError):
            generate_report("docx", _leads())

    def test_library_failure_is_wrapped(self):
        with patch("scripts.leads.report_formatter.render_pdf", side_effect=RuntimeError("boom")):
            with pytest.raises(ReportGenerationError) as exc:
                generate_report("pdf", _leads())
        assert "Failed to generate PDF report" in str(exc.value)
