"""
Supabase Client Helper for College Leads Hub.
Provides the shared connection used by the contact record store.

Usage:
    from scripts.lib.supabase_client import get_client, contacts_table

    client = get_client()
    rows = client.table(contacts_table()).select("*").execute().data
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from scripts.lib.errors import ConfigError
from scripts.lib.logger import setup_logger

logger = setup_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_CONTACTS_TABLE = "contact_submissions"

_client = None


def _credentials() -> tuple[str, str]:
    url = os.environ.get("SUPABASE_URL", "")
    key = (
        os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
        or os.environ.get("SUPABASE_KEY", "")
    )
    return url, key


def get_client():
    """Create and return a Supabase client (singleton)."""
    global _client
    if _client is not None:
        return _client

    url, key = _credentials()
    if not url or not key:
        raise ConfigError(
            "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in .env",
            setting="SUPABASE_URL",
        )

    from supabase import create_client
    _client = create_client(url, key)
    logger.info("Supabase client connected to %s", url)
    return _client


def reset_client() -> None:
    """Drop the cached client so the next call reconnects."""
    global _client
    _client = None


def contacts_table() -> str:
    """Name of the table holding contact form submissions."""
    return os.environ.get("CONTACTS_TABLE", DEFAULT_CONTACTS_TABLE)


def is_configured() -> bool:
    url, key = _credentials()
    return bool(url and key)
