# app/routers/pages.py
"""
Content pages.

/ is public and adapts to the current user; /about/me requires a login.
"""
from __future__ import annotations

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.views import logout_form, render_page, user_greeting
from auth.middleware import get_request_context, require_user
from auth.models import User
from auth.session import RequestContext

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse)
async def home(context: RequestContext = Depends(get_request_context)):
    """Home page. Greets the current user or links to the login form."""
    body = ["        <h1>Home</h1>", user_greeting(context.current_user)]
    if context.is_authenticated:
        body.append('        <p><a href="/about/me">About me</a></p>')
        body.append(logout_form())
    return HTMLResponse(content=render_page("Home", "\n".join(body)))


@router.get("/about/me", response_class=HTMLResponse)
async def about_me(user: User = Depends(require_user)):
    """Static about page for the logged-in user."""
    body = f"""        <h1>About me</h1>
        <p id="about-email">{escape(user.email)}</p>
        <p><a href="/">Home</a></p>
{logout_form()}"""
    return HTMLResponse(content=render_page("About me", body))
