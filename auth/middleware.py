# auth/middleware.py
"""
FastAPI authentication middleware.

Provides:
- Current-user resolution before every request
- Request context injection for route handlers
- The login-required gate dependency
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.responses import RedirectResponse

from auth.models import User
from auth.service import LoginRequiredError, get_user_by_id
from auth.session import RequestContext, resolve_current_user

LOGIN_PATH = "/login"


class CurrentUserMiddleware:
    """
    Middleware that resolves the session's user before dispatch.

    Must run inside Starlette's SessionMiddleware so scope["session"]
    exists. The result is stored on request.state.current_user.
    """

    def __init__(self, app, find_user=get_user_by_id):
        self.app = app
        self.find_user = find_user

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http":
            session = scope.get("session")
            if session is None:
                raise RuntimeError("CurrentUserMiddleware requires SessionMiddleware to run first")

            user = resolve_current_user(session, self.find_user)

            scope["state"] = scope.get("state", {})
            scope["state"]["current_user"] = user

        await self.app(scope, receive, send)


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency: session and current user for this request."""
    return RequestContext(
        session=request.session,
        current_user=getattr(request.state, "current_user", None),
    )


def require_user(context: RequestContext = Depends(get_request_context)) -> User:
    """
    FastAPI dependency: the authorization gate.

    Raises LoginRequiredError when nobody is logged in; the app turns it
    into a redirect to the login page before the handler body runs.
    """
    if context.current_user is None:
        raise LoginRequiredError("Authentication required")
    return context.current_user


async def login_required_handler(request: Request, exc: LoginRequiredError) -> RedirectResponse:
    """Exception handler: send unauthenticated visitors to the login page."""
    return RedirectResponse(url=LOGIN_PATH, status_code=302)
