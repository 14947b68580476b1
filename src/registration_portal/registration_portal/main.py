from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .auth.controller import register as register_auth
from .auth.service import AdminCredentials
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, SESSION_COOKIE_NAME
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .registrations.controller import register as register_registrations

logger = logging.getLogger(__name__)

# Sample values shipped in config and .env.example; never valid outside debug/testing.
_PLACEHOLDER_SECRET_KEYS = {"", "change-me", "dev-secret-key", "please-set-SECRET_KEY"}


def _admin_credentials(settings) -> AdminCredentials:
    return AdminCredentials(
        email=getattr(settings, "ADMIN_EMAIL", None) or None,
        password_hash=getattr(settings, "ADMIN_PASSWORD_HASH", None) or None,
        password=getattr(settings, "ADMIN_PASSWORD", None) or None,
    )


def _secret_key(settings) -> str:
    secret_key = (getattr(settings, "SECRET_KEY", "") or "").strip()
    if getattr(settings, "DEBUG", False) or getattr(settings, "TESTING", False):
        return secret_key
    if secret_key in _PLACEHOLDER_SECRET_KEYS:
        raise RuntimeError("SECRET_KEY must be set to a random value before starting in production.")
    return secret_key


def _register_health(app: Flask, container: Container, credentials: AdminCredentials) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        database = "not configured"
        if container.conn is not None:
            try:
                container.conn.ping()
                database = "connected"
            except Exception:
                logger.exception("Health check: database unreachable")
                database = "unreachable"

        healthy = database in {"connected", "not configured"} and credentials.configured
        return jsonify(
            {
                "status": "ok" if healthy else "degraded",
                "database": database,
                "config": {
                    "adminEmail": bool(credentials.email),
                    "adminPasswordHash": bool(credentials.password_hash),
                    "adminPassword": bool(credentials.password),
                    "secretKey": bool(app.secret_key),
                },
            }
        )


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    debug = bool(getattr(settings, "DEBUG", False))
    setup_logging(
        level=logging.DEBUG if debug else logging.INFO,
        log_file=getattr(settings, "LOG_FILE", None) or None,
    )

    app.secret_key = _secret_key(settings)
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["EVENT_NAME"] = getattr(settings, "EVENT_NAME", "Community Event")
    app.config["EVENT_SLUG"] = getattr(settings, "EVENT_SLUG", "event")

    # Admin session: signed cookie, 7 days, never readable from scripts.
    app.config["SESSION_COOKIE_NAME"] = SESSION_COOKIE_NAME
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Strict"
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=DEFAULT_SESSION_DAYS)

    credentials = _admin_credentials(settings)
    if not credentials.configured:
        logger.warning("Admin credentials are not configured; admin login is disabled")

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, admin_credentials=credentials)

    register_registrations(app, container)
    register_auth(app, container)
    _register_health(app, container, credentials)

    return app
