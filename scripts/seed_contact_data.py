"""
Contact Data Seeder
===================
Inserts realistic sample contact submissions spread over the last six
months, for local dashboards and report previews.

Usage:
    python scripts/seed_contact_data.py                # 50 submissions
    python scripts/seed_contact_data.py --count 200 --clear
    python scripts/seed_contact_data.py --dry-run
"""

from __future__ import annotations

import argparse
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Path setup
# ---------------------------------------------------------------------------
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT))

load_dotenv(PROJECT_ROOT / ".env")

from models.contact_models import CONTACT_STATUSES
from scripts.lib.logger import setup_logger
from scripts.lib.supabase_client import contacts_table, get_client

logger = setup_logger("seed_contact_data")

FIRST_NAMES = [
    "Aarav", "Vivaan", "Aditya", "Ananya", "Diya", "Ishaan", "Kavya", "Meera",
    "Rohan", "Saanvi", "Arjun", "Priya", "Neha", "Karan", "Riya", "Sara",
]
LAST_NAMES = [
    "Sharma", "Verma", "Gupta", "Patel", "Singh", "Kumar", "Mehta", "Shah",
    "Reddy", "Nair", "Iyer", "Rao", "Desai", "Joshi", "Kapoor", "Jain",
]
EMAIL_DOMAINS = ["gmail.com", "yahoo.com", "outlook.com", "hotmail.com"]

SUBJECTS = [
    "General Inquiry",
    "Admission Information",
    "Course Details",
    "Fee Structure",
    "Scholarship Information",
    "Placement Details",
    "Faculty Information",
    "Hostel Information",
    "Library Facilities",
    "Research Opportunities",
    "Internship Programs",
    "Campus Tour Request",
    "Academic Calendar",
    "Examination Schedule",
]

MESSAGES = [
    "I want to know about the admission process for Computer Science Engineering.",
    "Could you please provide information about the fee structure for the MBA program?",
    "I am interested in learning more about the placement statistics of your college.",
    "What are the eligibility criteria for the scholarship programs available?",
    "Can you share details about the hostel facilities and accommodation charges?",
    "I would like to know about the research opportunities for undergraduate students.",
    "What sports facilities are available on campus?",
    "I need information about the library timings and available resources.",
    "Could you tell me about the internship programs offered by the college?",
    "I want to schedule a campus tour. What is the procedure?",
    "What are the career counseling services available for students?",
    "Can you provide the academic calendar for the current year?",
]

ADMIN_NOTES = [
    "Shared the admission brochure and application link.",
    "Forwarded to the accounts office for fee details.",
    "Student plans to apply for the next intake.",
    "Called back, no answer.",
]


def build_submission(rng: random.Random, now: datetime) -> dict:
    first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
    submitted_at = now - timedelta(
        days=rng.randint(0, 180), hours=rng.randint(0, 23), minutes=rng.randint(0, 59),
    )
    status = rng.choice(CONTACT_STATUSES)

    row = {
        "name": f"{first} {last}",
        "email": f"{first}.{last}{rng.randint(1, 999)}@{rng.choice(EMAIL_DOMAINS)}".lower(),
        "phone": f"+91 {rng.randint(70000, 99999)} {rng.randint(10000, 99999)}",
        "subject": rng.choice(SUBJECTS),
        "message": rng.choice(MESSAGES),
        "status": status,
        "submitted_at": submitted_at.isoformat(),
    }
    if status == "replied":
        replied_at = submitted_at + timedelta(days=rng.randint(0, 5))
        row["replied_at"] = min(replied_at, now).isoformat()
    if status in ("replied", "archived") and rng.random() < 0.7:
        row["admin_notes"] = rng.choice(ADMIN_NOTES)
    return row


def build_submissions(
    count: int,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> list[dict]:
    """Sample rows, oldest first. The same seed and now give the same rows."""
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    rows = [build_submission(rng, now) for _ in range(count)]
    rows.sort(key=lambda r: r["submitted_at"])
    return rows


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed sample contact submissions")
    parser.add_argument("--count", type=int, default=50, help="Submissions to insert")
    parser.add_argument("--seed", type=int, help="Random seed for repeatable data")
    parser.add_argument("--clear", action="store_true",
                        help="Delete existing submissions first")
    parser.add_argument("--dry-run", action="store_true",
                        help="Log the rows without inserting")
    args = parser.parse_args()

    rows = build_submissions(args.count, seed=args.seed)

    if args.dry_run:
        logger.info("DRY RUN — %d submissions would be inserted", len(rows))
        for row in rows[:5]:
            logger.info("  %s | %s | %s", row["submitted_at"][:10], row["subject"], row["status"])
        return 0

    try:
        client = get_client()
        table = client.table(contacts_table())
        if args.clear:
            table.delete().neq("status", "").execute()
            logger.info("Cleared existing submissions from %s", contacts_table())
        table.insert(rows).execute()
    except Exception as e:
        logger.error("Seeding failed: %s", e)
        return 1

    logger.info("Inserted %d submissions into %s", len(rows), contacts_table())
    return 0


if __name__ == "__main__":
    sys.exit(main())
