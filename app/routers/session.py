# app/routers/session.py
"""
Login/logout endpoints.

- GET /login: login form, shows a one-shot error from a failed attempt
- POST /login: check credentials, bind the session, redirect
- DELETE /login: unbind the session, redirect
"""
from __future__ import annotations

import logging
from html import escape
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from app.views import render_page
from auth.middleware import LOGIN_PATH, get_request_context
from auth.service import InvalidCredentialsError, authenticate_user
from auth.session import (
    FLASH_ERROR,
    INVALID_CREDENTIALS_MESSAGE,
    RequestContext,
    log_in,
    log_out,
    pop_flash,
    set_flash,
)

_logger = logging.getLogger(__name__)

ROOT_PATH = "/"

router = APIRouter(tags=["Session"])


def _get_login_page_html(error_message: Optional[str] = None) -> str:
    """HTML for the login form."""
    error_html = ""
    if error_message:
        error_html = f'        <p class="error-msg" id="login-error">{escape(error_message)}</p>\n'

    body = f"""        <h1>Log in</h1>
{error_html}        <form method="post" action="{LOGIN_PATH}">
            <div class="form-group">
                <label for="email">Email</label>
                <input type="email" id="email" name="email" required>
            </div>
            <div class="form-group">
                <label for="password">Password</label>
                <input type="password" id="password" name="password" required>
            </div>
            <button type="submit" class="submit-btn">Log in</button>
        </form>"""
    return render_page("Log in", body)


@router.get(LOGIN_PATH, response_class=HTMLResponse)
async def new(context: RequestContext = Depends(get_request_context)):
    """
    Login form.

    A failed attempt leaves an error in the flash slot; it is shown on
    this render and cleared, so a reload no longer shows it.
    """
    error_message = pop_flash(context.session, FLASH_ERROR)
    return HTMLResponse(content=_get_login_page_html(error_message))


@router.post(LOGIN_PATH)
def create(
    email: str = Form(""),
    password: str = Form(""),
    context: RequestContext = Depends(get_request_context),
):
    """
    Process submitted credentials.

    Sync so bcrypt runs in the threadpool instead of the event loop.
    Unknown email and wrong password produce the same response.
    """
    try:
        user = authenticate_user(email, password)
    except InvalidCredentialsError:
        set_flash(context.session, FLASH_ERROR, INVALID_CREDENTIALS_MESSAGE)
        return RedirectResponse(url=LOGIN_PATH, status_code=302)

    log_in(context.session, user)
    _logger.info(f"User {user.id} logged in")
    return RedirectResponse(url=ROOT_PATH, status_code=302)


@router.delete(LOGIN_PATH)
async def destroy(context: RequestContext = Depends(get_request_context)):
    """Log out and return to the home page."""
    user = context.current_user
    if log_out(context.session):
        _logger.info(f"User {user.id if user else 'unknown'} logged out")
    return RedirectResponse(url=ROOT_PATH, status_code=302)
