"""
College Leads Hub — API Key Auth Middleware
=============================================
Guards the admin back office with an X-API-Key header checked against
the comma-separated ADMIN_API_KEYS setting.

Public endpoints (health, docs, contact form submission) bypass auth.
With require_auth off, requests without a key pass through.
"""
from __future__ import annotations

import hashlib
import hmac
import os

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from scripts.lib.logger import setup_logger

logger = setup_logger("api_middleware")

PUBLIC_PATHS = {
    "/api/health",
    "/docs",
    "/openapi.json",
    "/redoc",
    "/",
}

# (method, path) pairs open to website visitors
PUBLIC_ROUTES = {
    ("POST", "/api/contact/submit"),
}


def _hash_key(key: str) -> str:
    """SHA-256 hash of an API key."""
    return hashlib.sha256(key.encode()).hexdigest()


def load_key_hashes(raw: str = None) -> set[str]:
    raw = os.getenv("ADMIN_API_KEYS", "") if raw is None else raw
    return {_hash_key(k.strip()) for k in raw.split(",") if k.strip()}


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Validates X-API-Key on admin routes."""

    def __init__(self, app, require_auth: bool = False, api_keys: str = None):
        super().__init__(app)
        self.require_auth = require_auth
        self._key_hashes = load_key_hashes(api_keys)

    def is_public(self, method: str, path: str) -> bool:
        # CORS preflights carry no custom headers
        if method == "OPTIONS":
            return True
        return path in PUBLIC_PATHS or (method, path) in PUBLIC_ROUTES

    def is_valid(self, key: str) -> bool:
        candidate = _hash_key(key)
        return any(hmac.compare_digest(candidate, h) for h in self._key_hashes)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self.is_public(request.method, request.url.path):
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")

        if not api_key:
            if self.require_auth:
                return JSONResponse(
                    status_code=401, content={"detail": "Missing X-API-Key header"},
                )
            return await call_next(request)

        if not self.is_valid(api_key):
            logger.warning("Rejected API key on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=403, content={"detail": "Invalid API key"})

        return await call_next(request)
