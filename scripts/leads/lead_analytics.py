"""
College Leads Hub — Lead Analytics
====================================

Aggregates an already-filtered list of contact submissions into the
dashboard metrics. No filtering or I/O happens here.

Metrics:
  status / priority / subject breakdowns (zero-filled buckets)
  recent vs previous 7-day window and growth percentage
  potential students and conversion rate
  replied count and response rate
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from models.contact_models import ContactSubmission, LeadAnalytics
from scripts.leads.keyword_classifier import (
    classify_subject,
    is_potential_student,
    lead_priority,
)

GROWTH_WINDOW = timedelta(days=7)


def percentage(part: int, whole: int) -> float:
    """part / whole as a percentage rounded to 2 dp; 0 when whole is 0."""
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


def growth_rate(current: int, previous: int) -> float:
    """Percentage change from previous to current; 0 when previous is 0."""
    if previous <= 0:
        return 0.0
    return round((current - previous) / previous * 100, 2)


def compute_lead_analytics(
    submissions: Iterable[ContactSubmission],
    now: Optional[datetime] = None,
) -> LeadAnalytics:
    """
    Compute the lead analytics aggregate.

    Args:
        submissions: Leads already filtered by the caller.
        now: Reference time for the growth windows (default: current UTC time).

    Returns:
        LeadAnalytics with every bucket present, even when empty.
    """
    now = now or datetime.now(timezone.utc)
    recent_start = now - GROWTH_WINDOW
    previous_start = recent_start - GROWTH_WINDOW

    analytics = LeadAnalytics()

    for lead in submissions:
        analytics.total_leads += 1
        analytics.status_breakdown[lead.status] += 1
        analytics.priority_breakdown[lead_priority(lead)] += 1
        analytics.subject_analysis[classify_subject(lead.subject)] += 1

        if lead.submitted_at >= recent_start:
            analytics.recent_leads += 1
        elif lead.submitted_at >= previous_start:
            analytics.previous_period_leads += 1

        if is_potential_student(lead):
            analytics.potential_students += 1

    total = analytics.total_leads
    analytics.new_leads = analytics.status_breakdown["new"]
    analytics.replied_count = analytics.status_breakdown["replied"]
    analytics.growth = growth_rate(analytics.recent_leads, analytics.previous_period_leads)
    analytics.conversion_rate = percentage(analytics.potential_students, total)
    analytics.response_rate = percentage(analytics.replied_count, total)
    return analytics
