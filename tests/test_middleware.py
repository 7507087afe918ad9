"""Tests for the API key middleware."""

from unittest.mock import patch

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient

from dashboard.api.middleware import APIKeyMiddleware, load_key_hashes


def _app(require_auth=True, api_keys="admin-key-1, admin-key-2"):
    app = FastAPI()
    app.add_middleware(APIKeyMiddleware, require_auth=require_auth, api_keys=api_keys)

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    @app.post("/api/contact/submit")
    async def submit():
        return {"success": True}

    @app.get("/api/contact")
    async def contacts():
        return {"success": True}

    return TestClient(app)


class TestAPIKeyMiddleware:
    def test_public_paths_skip_auth(self):
        client = _app()
        assert client.get("/api/health").status_code == 200
        assert client.post("/api/contact/submit").status_code == 200

    def test_public_route_is_method_specific(self):
        client = _app()
        assert client.get("/api/contact").status_code == 401

    def test_missing_key_rejected_when_required(self):
        resp = _app().get("/api/contact")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Missing X-API-Key header"

    def test_missing_key_allowed_when_optional(self):
        assert _app(require_auth=False).get("/api/contact").status_code == 200

    def test_valid_key(self):
        resp = _app().get("/api/contact", headers={"X-API-Key": "admin-key-2"})
        assert resp.status_code == 200

    def test_cors_preflight_passes_when_key_required(self):
        app = FastAPI()
        # same order as the real app: CORS added first, key check runs first
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["https://college.example"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        app.add_middleware(APIKeyMiddleware, require_auth=True, api_keys="admin-key-1")

        @app.post("/api/contact/submit")
        async def submit():
            return {"success": True}

        @app.get("/api/contact")
        async def contacts():
            return {"success": True}

        client = TestClient(app)
        preflight = {
            "Origin": "https://college.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        }
        resp = client.options("/api/contact/submit", headers=preflight)
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "https://college.example"

        admin = client.options("/api/contact", headers={
            **preflight, "Access-Control-Request-Method": "GET",
        })
        assert admin.status_code == 200
        assert client.get("/api/contact").status_code == 401

    def test_invalid_key(self):
        resp = _app(require_auth=False).get("/api/contact", headers={"X-API-Key": "guess"})
        assert resp.status_code == 403
        assert resp.json()["detail"] == "Invalid API key"


class TestLoadKeyHashes:
    def test_reads_environment(self):
        with patch.dict("os.environ", {"ADMIN_API_KEYS": "a, b,,"}, clear=False):
            assert len(load_key_hashes()) == 2

    def test_empty(self):
        assert load_key_hashes("") == set()
