"""Tests for the lead keyword classifier."""

import pytest

from scripts.leads.keyword_classifier import (
    classify_priority,
    classify_subject,
    is_potential_student,
    lead_priority,
)
from factories import make_lead


class TestClassifyPriority:
    def test_admission_inquiry_is_high(self):
        assert classify_priority(
            "Admission Information",
            "I want to know about the admission process",
        ) == "high"

    def test_high_beats_medium(self):
        # "information" and "about" are medium keywords, "fee" is high
        assert classify_priority("Information about fee", "") == "high"

    def test_medium_keyword(self):
        assert classify_priority("Career guidance", "Need some help please") == "medium"

    def test_no_keywords_is_low(self):
        assert classify_priority("Hostel", "Is the canteen open on Sundays?") == "low"

    @pytest.mark.parametrize("subject,message", [("", ""), (None, None), ("   ", "")])
    def test_empty_text_is_low(self, subject, message):
        assert classify_priority(subject, message) == "low"

    def test_case_insensitive(self):
        assert classify_priority("URGENT", "") == "high"

    def test_substring_inside_longer_word_matches(self):
        assert classify_priority("Reapplying next year", "") == "high"
        assert classify_priority("", "discourse on ethics") == "high"

    def test_keyword_in_message_only(self):
        assert classify_priority("Hello", "What is the application deadline?") == "high"

    def test_lead_priority_uses_subject_and_message(self):
        lead = make_lead(subject="Question", message="Where is the library?")
        assert lead_priority(lead) == "medium"


class TestClassifySubject:
    @pytest.mark.parametrize("subject,bucket", [
        ("Admission Information", "Admissions"),
        ("Course Details", "Courses"),
        ("Fee Structure", "Financial"),
        ("Scholarship Information", "Financial"),
        ("Placement Details", "Placement"),
        ("Internship Programs", "Courses"),
        ("Hostel Information", "General"),
        ("", "General"),
    ])
    def test_buckets(self, subject, bucket):
        assert classify_subject(subject) == bucket

    def test_precedence_admissions_before_courses(self):
        assert classify_subject("Course admission query") == "Admissions"

    def test_precedence_financial_before_placement(self):
        assert classify_subject("Placement fee") == "Financial"


class TestPotentialStudent:
    def test_keyword_in_notes(self):
        lead = make_lead(subject="Hostel", message="Rooms?", admin_notes="Will APPLY next month")
        assert is_potential_student(lead) is True

    def test_keyword_in_message(self):
        lead = make_lead(subject="Hello", message="I am a student at another college")
        assert is_potential_student(lead) is True

    def test_no_keyword(self):
        lead = make_lead(subject="Alumni meet", message="When is the reunion?")
        assert is_potential_student(lead) is False
