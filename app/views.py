# app/views.py
"""HTML page shells shared by the routers."""
from __future__ import annotations

from html import escape
from typing import Optional

from auth.models import User


def render_page(title: str, body: str) -> str:
    """Wrap a body fragment in the common page layout."""
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>{escape(title)} - Sessiongate</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: system-ui, -apple-system, sans-serif;
            background: #0a0a0a;
            color: #e0e0e0;
            min-height: 100vh;
            display: flex;
            align-items: center;
            justify-content: center;
            padding: 1rem;
        }}
        .container {{ width: 100%; max-width: 400px; }}
        h1 {{ color: #f39c12; font-size: 1.75rem; margin-bottom: 1rem; }}
        p {{ margin-bottom: 1rem; }}
        a {{ color: #f39c12; }}
        .form-group {{ margin-bottom: 1rem; }}
        label {{ display: block; margin-bottom: 0.5rem; color: #aaa; font-size: 0.9rem; }}
        input {{
            width: 100%;
            padding: 0.75rem;
            background: #1a1a1a;
            border: 1px solid #333;
            border-radius: 4px;
            color: #e0e0e0;
            font-size: 1rem;
        }}
        .submit-btn {{
            width: 100%;
            padding: 0.875rem;
            background: #f39c12;
            color: #111;
            border: none;
            border-radius: 4px;
            font-size: 1rem;
            font-weight: 600;
            cursor: pointer;
        }}
        .error-msg {{ color: #e74c3c; font-size: 0.9rem; margin-bottom: 1rem; }}
    </style>
</head>
<body>
    <div class="container">
{body}
    </div>
</body>
</html>"""


def logout_form() -> str:
    """Logout button; posts to DELETE /login through the method override."""
    return """        <form method="post" action="/login?_method=DELETE">
            <button type="submit" class="submit-btn" id="logout-btn">Log out</button>
        </form>"""


def user_greeting(user: Optional[User]) -> str:
    if user is None:
        return '        <p id="anonymous">You are not logged in. <a href="/login">Log in</a></p>'
    return f'        <p id="greeting">Logged in as {escape(user.email)}</p>'
