# app/middleware.py
"""
HTTP middleware for the web app.

- SecurityHeadersMiddleware: hardening headers on every response
- MethodOverrideMiddleware: lets HTML forms reach DELETE/PUT/PATCH routes
"""
from __future__ import annotations

import logging
from urllib.parse import parse_qs

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

OVERRIDE_PARAM = "_method"
OVERRIDABLE_METHODS = frozenset({"DELETE", "PUT", "PATCH"})


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


class MethodOverrideMiddleware:
    """
    Rewrite POST requests carrying ?_method=<verb> into that verb.

    Browsers only submit forms as GET or POST, so the logout button posts
    to /login?_method=DELETE. Only DELETE, PUT and PATCH can be requested.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["method"] == "POST":
            query = parse_qs(scope.get("query_string", b"").decode("latin-1"))
            requested = (query.get(OVERRIDE_PARAM) or [""])[0].upper()
            if requested in OVERRIDABLE_METHODS:
                logger.debug(f"Method override POST -> {requested} for {scope['path']}")
                scope = dict(scope)
                scope["method"] = requested

        await self.app(scope, receive, send)
