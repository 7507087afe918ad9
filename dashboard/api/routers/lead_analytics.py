"""
College Leads Hub — Lead Analytics Router
===========================================
Dashboard analytics and downloadable reports over filtered leads.

Endpoints:
  GET /api/contact/leads-analytics  - Filtered leads + analytics aggregate
  GET /api/contact/leads-report     - Download CSV / XLSX / PDF report

Both accept startDate, endDate (YYYY-MM-DD or ISO 8601), subject
(substring) and status. Registered before the contacts router so these
paths are not captured by /api/contact/{id}.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from models.contact_models import LeadFilters
from scripts.lib.errors import InvalidFilterError, LeadsHubError, ReportFormatError
from scripts.lib.logger import setup_logger
from scripts.leads.contact_store import fetch_leads
from scripts.leads.lead_analytics import compute_lead_analytics
from scripts.leads.report_formatter import generate_report

logger = setup_logger("lead_analytics_router")

router = APIRouter(prefix="/api/contact", tags=["lead-analytics"])


def _filters(
    start_date: Optional[str],
    end_date: Optional[str],
    subject: Optional[str],
    status: Optional[str],
) -> LeadFilters:
    try:
        return LeadFilters.from_query(start_date, end_date, subject, status)
    except InvalidFilterError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/leads-analytics")
async def leads_analytics(
    start_date: Optional[str] = Query(None, alias="startDate", description="Earliest submission date"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Latest submission date (inclusive)"),
    subject: Optional[str] = Query(None, description="Subject substring"),
    status: Optional[str] = Query(None, description="new | read | replied | archived"),
):
    """
    Leads matching the filters plus their analytics aggregate.

    Returns status/priority/subject breakdowns, 7-day growth,
    potential-student conversion rate and response rate.
    """
    filters = _filters(start_date, end_date, subject, status)
    try:
        leads = fetch_leads(filters)
    except LeadsHubError as e:
        logger.error("Leads analytics fetch failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to fetch leads analytics")

    analytics = compute_lead_analytics(leads)
    return {
        "success": True,
        "data": {
            "contacts": [lead.to_api() for lead in leads],
            "analytics": analytics.to_api(),
            "filters": filters.to_api(),
            "total": len(leads),
        },
    }


@router.get("/leads-report")
async def leads_report(
    format: str = Query("csv", description="csv | xlsx | pdf"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    subject: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
):
    """Render the filtered leads as a file download."""
    filters = _filters(start_date, end_date, subject, status)
    try:
        leads = fetch_leads(filters)
        report = generate_report(format, leads, filters)
    except ReportFormatError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except LeadsHubError as e:
        logger.error("Lead report failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to generate report")

    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )
