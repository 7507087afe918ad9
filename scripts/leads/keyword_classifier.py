"""
College Leads Hub — Keyword Classifier
========================================

Keyword heuristics applied to contact submissions:
  classify_priority()     - high / medium / low priority tier
  classify_subject()      - coarse subject bucket for the dashboard histogram
  is_potential_student()  - heuristic "likely applicant" flag

Matching is plain substring containment over case-folded text, so a
keyword inside a longer word still counts ("apply" matches "applying").
"""
from __future__ import annotations

from typing import Optional

from models.contact_models import ContactSubmission

HIGH_PRIORITY_KEYWORDS: tuple[str, ...] = (
    "admission", "enrollment", "apply", "application", "program", "course",
    "fee", "fees", "scholarship", "deadline", "urgent", "immediate",
)

MEDIUM_PRIORITY_KEYWORDS: tuple[str, ...] = (
    "information", "details", "about", "inquiry", "question", "help",
    "guidance", "counseling", "career", "placement",
)

# Checked in order; the first bucket with a matching keyword wins.
SUBJECT_BUCKET_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Admissions", ("admission", "enrollment", "apply", "application", "eligibility")),
    ("Courses", ("course", "program", "curriculum", "syllabus", "academic")),
    ("Financial", ("fee", "scholarship", "financial", "payment", "loan")),
    ("Placement", ("placement", "career", "job", "internship", "recruit")),
)
DEFAULT_SUBJECT_BUCKET = "General"

POTENTIAL_STUDENT_KEYWORDS: tuple[str, ...] = (
    "student", "admission", "enrollment", "apply",
)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _lead_text(subject: Optional[str], message: Optional[str]) -> str:
    return f"{subject or ''} {message or ''}".casefold()


def classify_priority(subject: Optional[str], message: Optional[str]) -> str:
    """
    Priority tier for a submission's subject and message.

    High-priority keywords always take precedence over medium ones.
    Empty text is low priority.
    """
    text = _lead_text(subject, message)
    if _contains_any(text, HIGH_PRIORITY_KEYWORDS):
        return "high"
    if _contains_any(text, MEDIUM_PRIORITY_KEYWORDS):
        return "medium"
    return "low"


def lead_priority(submission: ContactSubmission) -> str:
    return classify_priority(submission.subject, submission.message)


def classify_subject(subject: Optional[str]) -> str:
    """Coarse subject bucket: Admissions, Courses, Financial, Placement or General."""
    text = (subject or "").casefold()
    for bucket, keywords in SUBJECT_BUCKET_KEYWORDS:
        if _contains_any(text, keywords):
            return bucket
    return DEFAULT_SUBJECT_BUCKET


def is_potential_student(submission: ContactSubmission) -> bool:
    """True when admin notes or the lead text mention an applicant keyword."""
    notes = (submission.admin_notes or "").casefold()
    if _contains_any(notes, POTENTIAL_STUDENT_KEYWORDS):
        return True
    return _contains_any(
        _lead_text(submission.subject, submission.message),
        POTENTIAL_STUDENT_KEYWORDS,
    )
