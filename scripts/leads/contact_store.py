"""
College Leads Hub — Contact Record Store
==========================================

Persistence for contact form submissions in the Supabase
`contact_submissions` table (name overridable via CONTACTS_TABLE).

Functions:
  validate_submission()  - public form validation and normalisation
  create_submission()    - insert a new lead (status "new")
  list_submissions()     - paginated admin listing with status/search
  status_summary()       - lead counts per status
  get_submission()       - single lead by id
  mark_read()            - view action: new -> read
  update_submission()    - status / admin notes update
  record_reply()         - mark replied and keep the reply text
  delete_submission()    - remove a lead
  fetch_leads()          - every lead matching LeadFilters (analytics, reports)

Usage:
    from scripts.leads.contact_store import fetch_leads
    leads = fetch_leads(LeadFilters.from_query(start_date="2025-01-01"))
"""
from __future__ import annotations

import re
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from models.contact_models import (
    CONTACT_STATUSES,
    ContactCreate,
    ContactSubmission,
    LeadFilters,
)
from scripts.lib.errors import DataFetchError, SubmissionValidationError
from scripts.lib.logger import setup_logger
from scripts.lib.supabase_client import contacts_table, get_client

logger = setup_logger("contact_store")

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 2000
FIELD_LIMITS = {"name": 100, "phone": 20, "subject": 200}
ADMIN_NOTES_MAX_LENGTH = 1000

FETCH_PAGE_SIZE = 1000


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _execute(query, action: str):
    try:
        return query.execute()
    except Exception as e:
        logger.error("Supabase %s failed on %s: %s", action, contacts_table(), e)
        raise DataFetchError(f"Failed to {action}", source=contacts_table()) from e


def _quote_filter_value(value: str) -> str:
    """Double-quote a PostgREST filter value so , ( ) and . are taken literally."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _to_records(rows: Optional[list]) -> list[ContactSubmission]:
    return [ContactSubmission.model_validate(row) for row in (rows or [])]


# ─── Public form ────────────────────────────────────────────

def validate_submission(payload: ContactCreate) -> dict:
    """
    Validate a public contact form payload and return a normalised row.

    Raises:
        SubmissionValidationError: with a message suitable for the form.
    """
    name = (payload.name or "").strip()
    email = (payload.email or "").strip().lower()
    subject = (payload.subject or "").strip()
    message = (payload.message or "").strip()
    phone = (payload.phone or "").strip() or None

    if not name or not email or not subject or not message:
        raise SubmissionValidationError("Name, email, subject, and message are required")

    if not EMAIL_PATTERN.match(email):
        raise SubmissionValidationError(
            "Please provide a valid email address", field="email",
        )

    if len(message) < MESSAGE_MIN_LENGTH:
        raise SubmissionValidationError(
            f"Message must be at least {MESSAGE_MIN_LENGTH} characters long", field="message",
        )
    if len(message) > MESSAGE_MAX_LENGTH:
        raise SubmissionValidationError(
            f"Message cannot exceed {MESSAGE_MAX_LENGTH} characters", field="message",
        )

    values = {"name": name, "phone": phone or "", "subject": subject}
    for field, limit in FIELD_LIMITS.items():
        if len(values[field]) > limit:
            raise SubmissionValidationError(
                f"{field.capitalize()} cannot exceed {limit} characters", field=field,
            )

    row = {"name": name, "email": email, "subject": subject, "message": message}
    if phone:
        row["phone"] = phone
    return row


def create_submission(payload: ContactCreate) -> ContactSubmission:
    """Validate and store a new lead. Status is always "new"."""
    row = validate_submission(payload)
    row["status"] = "new"
    row["submitted_at"] = _now()

    client = get_client()
    result = _execute(client.table(contacts_table()).insert(row), "create submission")
    if not result.data:
        raise DataFetchError("Insert returned no row", source=contacts_table())

    record = ContactSubmission.model_validate(result.data[0])
    logger.info("New contact submission %s (%s)", record.id, record.subject)
    return record


# ─── Admin listing ──────────────────────────────────────────

def list_submissions(
    status: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[ContactSubmission], int]:
    """
    Page of leads, newest first.

    Returns:
        (records, total matching count)
    """
    client = get_client()
    query = client.table(contacts_table()).select("*", count="exact")

    if status:
        query = query.eq("status", status)
    if search:
        pattern = _quote_filter_value(f"%{search}%")
        query = query.or_(
            f"name.ilike.{pattern},"
            f"email.ilike.{pattern},"
            f"subject.ilike.{pattern}"
        )

    offset = (page - 1) * limit
    query = query.order("submitted_at", desc=True).range(offset, offset + limit - 1)

    result = _execute(query, "list submissions")
    records = _to_records(result.data)
    total = result.count if result.count is not None else len(records)
    return records, total


def status_summary() -> dict[str, int]:
    """Lead count per status across the whole table."""
    client = get_client()
    result = _execute(client.table(contacts_table()).select("status"), "summarise statuses")
    counts = Counter(row.get("status") for row in (result.data or []))
    return {status: counts[status] for status in CONTACT_STATUSES if counts[status]}


# ─── Single record ──────────────────────────────────────────

def get_submission(submission_id: str) -> Optional[ContactSubmission]:
    client = get_client()
    result = _execute(
        client.table(contacts_table()).select("*").eq("id", submission_id).limit(1),
        "fetch submission",
    )
    records = _to_records(result.data)
    return records[0] if records else None


def _apply_update(submission_id: str, patch: dict) -> Optional[ContactSubmission]:
    client = get_client()
    result = _execute(
        client.table(contacts_table()).update(patch).eq("id", submission_id),
        "update submission",
    )
    records = _to_records(result.data)
    return records[0] if records else get_submission(submission_id)


def mark_read(submission: ContactSubmission) -> ContactSubmission:
    """Viewing a new lead marks it read. Other statuses are left alone."""
    if submission.status != "new":
        return submission
    updated = _apply_update(submission.id, {"status": "read"})
    logger.info("Contact submission %s marked read", submission.id)
    return updated or submission.model_copy(update={"status": "read"})


def update_submission(
    submission_id: str,
    status: Optional[str] = None,
    admin_notes: Optional[str] = None,
) -> Optional[ContactSubmission]:
    """
    Update status and/or admin notes.

    Setting status "replied" stamps replied_at with the current time.

    Returns:
        The updated record, or None if the id does not exist.

    Raises:
        SubmissionValidationError: unknown status or notes too long.
    """
    if status and status not in CONTACT_STATUSES:
        raise SubmissionValidationError(
            "Invalid status. Must be one of: " + ", ".join(CONTACT_STATUSES),
            field="status",
        )
    if admin_notes is not None and len(admin_notes) > ADMIN_NOTES_MAX_LENGTH:
        raise SubmissionValidationError(
            f"Admin notes cannot exceed {ADMIN_NOTES_MAX_LENGTH} characters",
            field="adminNotes",
        )

    if get_submission(submission_id) is None:
        return None

    patch = {}
    if status:
        patch["status"] = status
        if status == "replied":
            patch["replied_at"] = _now()
    if admin_notes is not None:
        patch["admin_notes"] = admin_notes.strip()

    if not patch:
        return get_submission(submission_id)

    updated = _apply_update(submission_id, patch)
    logger.info("Contact submission %s updated: %s", submission_id, sorted(patch))
    return updated


def record_reply(submission_id: str, reply_message: str) -> Optional[ContactSubmission]:
    """Mark a lead replied and keep the reply text in its admin notes."""
    return update_submission(submission_id, status="replied", admin_notes=reply_message)


def delete_submission(submission_id: str) -> bool:
    client = get_client()
    result = _execute(
        client.table(contacts_table()).delete().eq("id", submission_id),
        "delete submission",
    )
    deleted = bool(result.data)
    if deleted:
        logger.info("Contact submission %s deleted", submission_id)
    return deleted


# ─── Lead queries ───────────────────────────────────────────

def fetch_leads(filters: LeadFilters) -> list[ContactSubmission]:
    """
    Every lead matching the filters, newest first.

    Reads in pages of FETCH_PAGE_SIZE until the store runs out of rows.
    """
    client = get_client()
    leads: list[ContactSubmission] = []
    offset = 0

    while True:
        query = client.table(contacts_table()).select("*")
        if filters.start_date:
            query = query.gte("submitted_at", filters.start_date.isoformat())
        if filters.end_date:
            query = query.lte("submitted_at", filters.end_date.isoformat())
        if filters.subject:
            query = query.ilike("subject", f"%{filters.subject}%")
        if filters.status:
            query = query.eq("status", filters.status)

        query = query.order("submitted_at", desc=True).range(
            offset, offset + FETCH_PAGE_SIZE - 1,
        )
        result = _execute(query, "fetch leads")
        batch = _to_records(result.data)
        leads.extend(batch)

        if len(batch) < FETCH_PAGE_SIZE:
            break
        offset += FETCH_PAGE_SIZE

    logger.info("Fetched %d leads", len(leads))
    return leads
