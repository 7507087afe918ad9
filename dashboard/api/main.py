"""
College Leads Hub — API Server
================================

Back-office API for college website contact submissions ("leads").

Route groups:
  /api/health                  - Health check
  /api/contact/submit          - Public contact form
  /api/contact/*               - Admin submission management
  /api/contact/leads-analytics - Lead analytics for the dashboard
  /api/contact/leads-report    - CSV / XLSX / PDF lead reports
"""

import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.middleware import APIKeyMiddleware
from dashboard.api.routers.contacts import router as contacts_router
from dashboard.api.routers.lead_analytics import router as lead_analytics_router
from scripts.lib import supabase_client
from scripts.lib.logger import setup_logger

load_dotenv()

logger = setup_logger("leads_hub_api")

VERSION = "1.0.0"


# ─── Lifespan ─────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app):
    """Application startup and shutdown."""
    logger.info("Starting College Leads Hub...")

    if supabase_client.is_configured():
        logger.info("Contact store table: %s", supabase_client.contacts_table())
    else:
        logger.warning("Supabase not configured; contact endpoints will fail")

    logger.info("College Leads Hub ready")
    yield
    logger.info("Shutting down College Leads Hub...")


# ─── App Setup ────────────────────────────────────────────────

cors_origins = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
).split(",")

app = FastAPI(
    title="College Leads Hub",
    version=VERSION,
    description="Contact submissions, lead analytics and lead reports for the college website",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.add_middleware(
    APIKeyMiddleware,
    require_auth=os.getenv("REQUIRE_API_KEY", "false").lower() == "true",
)


# ─── Include Routers ──────────────────────────────────────────
# lead_analytics first: its fixed paths would otherwise match /api/contact/{id}

app.include_router(lead_analytics_router)
app.include_router(contacts_router)


# ─── Health ───────────────────────────────────────────────────

@app.get("/api/health", tags=["system"])
async def health():
    """Health check with store configuration status."""
    return {
        "status": "healthy",
        "service": "College Leads Hub",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "integrations": {
            "supabase": supabase_client.is_configured(),
        },
    }


@app.get("/", tags=["system"])
async def root():
    return {"message": "College Leads Hub API is running"}
