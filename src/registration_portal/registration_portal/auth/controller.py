from __future__ import annotations

import logging

from flask import Flask, redirect, render_template, session, url_for

from ..common.http import fail, json_body, ok, unexpected
from ..container import Container
from ..core.exceptions import DomainError
from .guards import is_admin

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/admin", methods=["GET"], endpoint="admin_login_page")
    def admin_login_page():
        if is_admin():
            return redirect(url_for("admin_dashboard"))
        return render_template("admin/login.html", event_name=app.config.get("EVENT_NAME"))

    @app.route("/api/admin/auth", methods=["POST"], endpoint="api_admin_login")
    def api_admin_login():
        body = json_body()
        try:
            admin = container.auth_service.authenticate(body.get("email"), body.get("password"))
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Admin login error")
            return unexpected("An unexpected error occurred. Please try again later.")

        session.clear()
        session.permanent = True
        session["admin_email"] = admin.email
        session["token"] = admin.token
        return ok({"email": admin.email}, message="Login successful.")

    @app.route("/api/admin/auth", methods=["DELETE"], endpoint="api_admin_logout")
    def api_admin_logout():
        session.clear()
        return ok(message="Logout successful.")
