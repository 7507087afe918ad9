"""
Lead Report Export
==================
Fetches leads matching the given filters, logs the analytics summary and
writes a CSV / XLSX / PDF report to disk.

Usage:
    python scripts/export_leads_report.py                        # CSV, all leads
    python scripts/export_leads_report.py --format pdf --status new
    python scripts/export_leads_report.py --format xlsx \
        --start-date 2025-01-01 --end-date 2025-03-31 --subject admission
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Path setup
# ---------------------------------------------------------------------------
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT))

load_dotenv(PROJECT_ROOT / ".env")

from models.contact_models import CONTACT_STATUSES, LeadFilters
from scripts.lib.errors import LeadsHubError
from scripts.lib.logger import setup_logger
from scripts.leads.contact_store import fetch_leads
from scripts.leads.lead_analytics import compute_lead_analytics
from scripts.leads.report_formatter import generate_report

logger = setup_logger("export_leads_report")

DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "data" / "reports"


def export_report(
    fmt: str,
    filters: LeadFilters,
    output_dir: Path,
) -> Path:
    """Fetch, render and write one report. Returns the written path."""
    leads = fetch_leads(filters)
    analytics = compute_lead_analytics(leads)

    logger.info("Leads: %d (new: %d, replied: %d)",
                analytics.total_leads, analytics.new_leads, analytics.replied_count)
    logger.info("Priority: %s", analytics.priority_breakdown)
    logger.info("Subjects: %s", analytics.subject_analysis)
    logger.info("7-day growth: %s%% (%d vs %d)",
                analytics.growth, analytics.recent_leads, analytics.previous_period_leads)
    logger.info("Conversion rate: %s%% | Response rate: %s%%",
                analytics.conversion_rate, analytics.response_rate)

    report = generate_report(fmt, leads, filters)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report.filename
    path.write_bytes(report.content)
    logger.info("Wrote %s (%.1f KB)", path, len(report.content) / 1024)
    return path


def main() -> int:
    parser = argparse.ArgumentParser(description="Export a student leads report")
    parser.add_argument("--format", default="csv", choices=["csv", "xlsx", "pdf"],
                        help="Report format (default: csv)")
    parser.add_argument("--start-date", help="Earliest submission date (YYYY-MM-DD)")
    parser.add_argument("--end-date", help="Latest submission date, inclusive (YYYY-MM-DD)")
    parser.add_argument("--subject", help="Only leads whose subject contains this text")
    parser.add_argument("--status", choices=CONTACT_STATUSES,
                        help="Only leads with this status")
    parser.add_argument("--output-dir", type=Path,
                        default=Path(os.getenv("REPORT_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
                        help="Directory for the report file")
    args = parser.parse_args()

    logger.info("=== Student Leads Report Export ===")
    try:
        filters = LeadFilters.from_query(
            args.start_date, args.end_date, args.subject, args.status,
        )
        for line in filters.describe() or ["No filters (all leads)"]:
            logger.info("  %s", line)
        export_report(args.format, filters, args.output_dir)
    except LeadsHubError as e:
        logger.error("Export failed: %s", e)
        return 1

    logger.info("=== Export complete ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
