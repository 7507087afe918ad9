"""
College Leads Hub — Entry Point
=================================

Run: python main.py
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger("college-leads-hub")

PORT = int(os.getenv("DASHBOARD_PORT", "8001"))

if __name__ == "__main__":
    import uvicorn

    logger.info("=" * 60)
    logger.info("  COLLEGE LEADS HUB — Admissions Back Office API")
    logger.info("=" * 60)
    logger.info(f"  Environment : {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"  Server      : http://0.0.0.0:{PORT}")
    logger.info(f"  API Docs    : http://localhost:{PORT}/docs")
    logger.info(f"  API key     : {'required' if os.getenv('REQUIRE_API_KEY', 'false').lower() == 'true' else 'optional'}")
    logger.info(f"  Supabase    : {os.getenv('SUPABASE_URL') or 'NOT CONFIGURED'}")
    logger.info(f"  Leads table : {os.getenv('CONTACTS_TABLE', 'contact_submissions')}")
    logger.info(f"  CORS origins: {os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://localhost:5173')}")
    logger.info(f"  Analytics   : http://localhost:{PORT}/api/contact/leads-analytics")
    logger.info(f"  Reports     : http://localhost:{PORT}/api/contact/leads-report?format=csv|xlsx|pdf")
    logger.info(f"  Debug       : {os.getenv('DEBUG', 'false')}")
    logger.info("=" * 60)

    uvicorn.run(
        "dashboard.api.main:app",
        host="0.0.0.0",
        port=PORT,
        reload=os.getenv("DEBUG", "false").lower() == "true",
    )
