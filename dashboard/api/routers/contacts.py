"""
College Leads Hub — Contacts Router
=====================================
Public contact form submission and admin management of submissions.

Endpoints:
  POST   /api/contact/submit       - Submit the public contact form
  GET    /api/contact              - List submissions (page, limit, status, search)
  GET    /api/contact/{id}         - Single submission (marks new ones read)
  PUT    /api/contact/{id}/status  - Update status and/or admin notes
  POST   /api/contact/{id}/reply   - Mark replied and record the reply text
  DELETE /api/contact/{id}         - Delete a submission
"""
from __future__ import annotations

import math
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from models.contact_models import CONTACT_STATUSES, ContactCreate, ReplyRequest, StatusUpdate
from scripts.lib.errors import LeadsHubError, SubmissionValidationError
from scripts.lib.logger import setup_logger
from scripts.leads import contact_store

logger = setup_logger("contacts_router")

router = APIRouter(prefix="/api/contact", tags=["contacts"])


@router.post("/submit", status_code=201)
async def submit_contact(body: ContactCreate):
    """Store a public contact form submission."""
    try:
        record = contact_store.create_submission(body)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except LeadsHubError as e:
        logger.error("Contact submission failed: %s", e)
        raise HTTPException(
            status_code=500,
            detail="Error submitting your message. Please try again later.",
        )

    return {
        "success": True,
        "message": "Thank you for your message! We will get back to you soon.",
        "data": {"id": record.id, "submittedAt": record.submitted_at.isoformat()},
    }


@router.get("")
async def list_contacts(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=200, description="Items per page"),
    status: Optional[str] = Query(None, description="Filter by status"),
    search: Optional[str] = Query(None, description="Search name/email/subject"),
):
    """List submissions, newest first, with a per-status summary."""
    if status and status not in CONTACT_STATUSES:
        raise HTTPException(
            status_code=400,
            detail="Invalid status. Must be one of: " + ", ".join(CONTACT_STATUSES),
        )
    try:
        records, total = contact_store.list_submissions(
            status=status, search=search, page=page, limit=limit,
        )
        summary = contact_store.status_summary()
    except LeadsHubError as e:
        logger.error("List contacts failed: %s", e)
        raise HTTPException(status_code=500, detail="Error fetching contact submissions")

    return {
        "success": True,
        "data": {
            "contacts": [r.to_api() for r in records],
            "pagination": {
                "currentPage": page,
                "totalPages": math.ceil(total / limit),
                "totalItems": total,
                "itemsPerPage": limit,
            },
            "statusSummary": summary,
        },
    }


@router.get("/{contact_id}")
async def get_contact(contact_id: str):
    """Get a single submission. Viewing a new submission marks it read."""
    try:
        record = contact_store.get_submission(contact_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Contact submission not found")
        record = contact_store.mark_read(record)
    except LeadsHubError as e:
        logger.error("Get contact %s failed: %s", contact_id, e)
        raise HTTPException(status_code=500, detail="Error fetching contact submission")

    return {"success": True, "data": record.to_api()}


@router.put("/{contact_id}/status")
async def update_contact_status(contact_id: str, body: StatusUpdate):
    """Update status and/or admin notes. "replied" stamps repliedAt."""
    try:
        record = contact_store.update_submission(
            contact_id, status=body.status, admin_notes=body.admin_notes,
        )
    except SubmissionValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except LeadsHubError as e:
        logger.error("Update contact %s failed: %s", contact_id, e)
        raise HTTPException(status_code=500, detail="Error updating contact status")

    if record is None:
        raise HTTPException(status_code=404, detail="Contact submission not found")

    return {
        "success": True,
        "message": "Contact status updated successfully",
        "data": record.to_api(),
    }


@router.post("/{contact_id}/reply")
async def reply_to_contact(contact_id: str, body: ReplyRequest):
    """Record an admin reply: status becomes replied, reply kept in notes."""
    try:
        record = contact_store.record_reply(contact_id, body.reply_message)
    except SubmissionValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except LeadsHubError as e:
        logger.error("Reply to contact %s failed: %s", contact_id, e)
        raise HTTPException(status_code=500, detail="Error recording reply")

    if record is None:
        raise HTTPException(status_code=404, detail="Contact submission not found")

    return {"success": True, "message": "Reply recorded successfully", "data": record.to_api()}


@router.delete("/{contact_id}")
async def delete_contact(contact_id: str):
    """Delete a submission."""
    try:
        deleted = contact_store.delete_submission(contact_id)
    except LeadsHubError as e:
        logger.error("Delete contact %s failed: %s", contact_id, e)
        raise HTTPException(status_code=500, detail="Error deleting contact submission")

    if not deleted:
        raise HTTPException(status_code=404, detail="Contact submission not found")

    return {"success": True, "message": "Contact submission deleted successfully"}
