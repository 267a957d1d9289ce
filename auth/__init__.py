# auth/__init__.py
"""
Authentication module.

Provides:
- User model and store (lookup by id/email, bcrypt verification)
- Session helpers (current-user resolution, login/logout, flash slots)
- Middleware and the login-required gate
"""

from auth.models import User
from auth.service import (
    AuthError,
    InvalidCredentialsError,
    LoginRequiredError,
    authenticate_user,
    get_user_by_email,
    get_user_by_id,
)
from auth.session import (
    RequestContext,
    resolve_current_user,
    log_in,
    log_out,
    set_flash,
    pop_flash,
)

__all__ = [
    "User",
    "AuthError",
    "InvalidCredentialsError",
    "LoginRequiredError",
    "authenticate_user",
    "get_user_by_email",
    "get_user_by_id",
    "RequestContext",
    "resolve_current_user",
    "log_in",
    "log_out",
    "set_flash",
    "pop_flash",
]
