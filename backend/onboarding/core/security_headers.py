"""HTTP security headers middleware."""

from __future__ import annotations

from fastapi import FastAPI, Request

from onboarding.core.config import Settings

# Result pages use inline styles and a remote logo; nothing else is allowed.
PAGE_CSP = "default-src 'none'; img-src https: data:; style-src 'unsafe-inline'; frame-ancestors 'none'; base-uri 'none'"
API_CSP = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"


def install_security_headers_middleware(app: FastAPI, settings: Settings) -> None:
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):  # type: ignore[override]
        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        # Verify URLs carry the one-time secret in the query string.
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Content-Security-Policy"] = PAGE_CSP if content_type.startswith("text/html") else API_CSP
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
