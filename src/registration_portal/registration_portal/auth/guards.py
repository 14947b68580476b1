from __future__ import annotations

from functools import wraps

from flask import jsonify, redirect, session, url_for


def is_admin() -> bool:
    return bool(session.get("admin_email")) and bool(session.get("token"))


def admin_page_required(view):
    """Dashboard pages: anonymous visitors are sent to the login page."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin():
            return redirect(url_for("admin_login_page"))
        return view(*args, **kwargs)

    return wrapper


def admin_api_required(view):
    """Dashboard APIs: anonymous callers get a 401 JSON envelope."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin():
            return (
                jsonify(
                    {
                        "success": False,
                        "error": "Unauthorized",
                        "message": "Admin login required.",
                    }
                ),
                401,
            )
        return view(*args, **kwargs)

    return wrapper
