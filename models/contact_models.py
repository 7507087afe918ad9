"""
College Leads Hub — Contact & Lead Pydantic Models
====================================================

Records, request bodies, filters and the analytics aggregate for
contact form submissions. API payloads use camelCase keys; store rows
use snake_case column names. Both are accepted on input.
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from scripts.lib.errors import InvalidFilterError

ContactStatus = Literal["new", "read", "replied", "archived"]
CONTACT_STATUSES: tuple[str, ...] = ("new", "read", "replied", "archived")

Priority = Literal["high", "medium", "low"]
PRIORITIES: tuple[str, ...] = ("high", "medium", "low")

SUBJECT_BUCKETS: tuple[str, ...] = (
    "Admissions", "Courses", "Financial", "Placement", "General",
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api(self) -> dict:
        """Serialize with camelCase keys and ISO timestamps."""
        return self.model_dump(by_alias=True, mode="json")


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ─── Records ────────────────────────────────────────────────

class ContactSubmission(CamelModel):
    """A contact form submission as stored and returned by the API."""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: ContactStatus = "new"
    submitted_at: datetime
    replied_at: Optional[datetime] = None
    admin_notes: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return str(v) if v is not None else v

    @field_validator("submitted_at", "replied_at")
    @classmethod
    def _utc(cls, v):
        return _as_utc(v)


# ─── Request Bodies ─────────────────────────────────────────

class ContactCreate(CamelModel):
    """Public contact form payload. Validated by the store, not by FastAPI."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class StatusUpdate(CamelModel):
    """Admin status / notes update."""
    status: Optional[str] = None
    admin_notes: Optional[str] = None


class ReplyRequest(CamelModel):
    """Admin reply to a submission."""
    reply_message: str = Field(..., min_length=1, max_length=1000)


# ─── Filters ────────────────────────────────────────────────

def _parse_bound(value: Optional[str], field: str, end_of_day: bool) -> Optional[datetime]:
    if value is None or not value.strip():
        return None
    raw = value.strip()
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            return datetime.combine(
                day, time.max if end_of_day else time.min, tzinfo=timezone.utc,
            )
        return _as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
    except ValueError:
        raise InvalidFilterError(
            f"Invalid {field}: '{value}'. Use YYYY-MM-DD or an ISO 8601 timestamp",
            field=field, value=value,
        )


class LeadFilters(BaseModel):
    """Filters applied when fetching leads for analytics and reports."""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    subject: Optional[str] = None
    status: Optional[ContactStatus] = None

    @classmethod
    def from_query(
        cls,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        subject: Optional[str] = None,
        status: Optional[str] = None,
    ) -> "LeadFilters":
        """Build filters from raw query-string values."""
        start = _parse_bound(start_date, "startDate", end_of_day=False)
        end = _parse_bound(end_date, "endDate", end_of_day=True)
        if start and end and start > end:
            raise InvalidFilterError(
                "startDate must not be after endDate", field="startDate", value=start_date,
            )

        status = (status or "").strip().lower() or None
        if status and status not in CONTACT_STATUSES:
            raise InvalidFilterError(
                "Invalid status. Must be one of: " + ", ".join(CONTACT_STATUSES),
                field="status", value=status,
            )

        return cls(
            start_date=start,
            end_date=end,
            subject=(subject or "").strip() or None,
            status=status,
        )

    def date_range_label(self) -> Optional[str]:
        start = self.start_date.date().isoformat() if self.start_date else None
        end = self.end_date.date().isoformat() if self.end_date else None
        if start and end:
            return f"{start} to {end}"
        if start:
            return f"From {start}"
        if end:
            return f"Until {end}"
        return None

    def describe(self) -> list[str]:
        """Human-readable lines for report headers."""
        lines = []
        date_range = self.date_range_label()
        if date_range:
            lines.append(f"Date Range: {date_range}")
        if self.subject:
            lines.append(f"Subject Filter: {self.subject}")
        if self.status:
            lines.append(f"Status Filter: {self.status.upper()}")
        return lines

    def to_api(self) -> dict:
        return {
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "subject": self.subject,
            "status": self.status,
        }


# ─── Analytics ──────────────────────────────────────────────

class LeadAnalytics(CamelModel):
    """Aggregate lead metrics for the admin dashboard and report summaries."""
    total_leads: int = 0
    new_leads: int = 0
    status_breakdown: dict[str, int] = Field(
        default_factory=lambda: dict.fromkeys(CONTACT_STATUSES, 0)
    )
    priority_breakdown: dict[str, int] = Field(
        default_factory=lambda: dict.fromkeys(PRIORITIES, 0)
    )
    subject_analysis: dict[str, int] = Field(
        default_factory=lambda: dict.fromkeys(SUBJECT_BUCKETS, 0)
    )
    recent_leads: int = 0
    previous_period_leads: int = 0
    growth: float = 0.0
    potential_students: int = 0
    conversion_rate: float = 0.0
    replied_count: int = 0
    response_rate: float = 0.0
