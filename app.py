#!/usr/bin/env python3
"""
Portfolio — Application Entry Point
Creates the Flask app and registers the public site and admin Blueprints.

    python app.py                       # dev server on $PORT (default 5000)
    gunicorn 'app:create_app()'         # production
"""

import os
import secrets
import logging
import time

from flask import Flask, jsonify, redirect, request, url_for
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from logging_config import setup_logging
from portfolio.agents.mailer import ContactMailer
from portfolio.api.admin import create_admin_blueprint
from portfolio.api.site import create_site_blueprint
from portfolio.core import paths
from portfolio.core import secrets as site_secrets
from portfolio.core.content import ContentStore
from portfolio.core.security import init_security
from portfolio.core.startup_checks import run_startup_checks
from portfolio.core.uploads import AUDIO_POLICY, MiB

log = logging.getLogger("portfolio")


def load_config() -> dict:
    """Build app.config values from the environment."""
    data_dir = paths.resolve_data_dir()
    return {
        "SECRET_KEY": site_secrets.get_key("secret_key") or secrets.token_hex(32),
        "ADMIN_USER": site_secrets.get_key("admin_user"),
        "ADMIN_PASS": site_secrets.get_key("admin_pass"),
        "DATA_DIR": data_dir,
        "WORK_DIR": paths.resolve_work_dir(data_dir),
        "MAIL_USER": site_secrets.get_key("mail_user"),
        "MAIL_PASSWORD": site_secrets.get_key("mail_password"),
        "CONTACT_RECIPIENT": site_secrets.get_key("contact_recipient"),
        "SMTP_HOST": site_secrets.get_key("smtp_host"),
        "SMTP_PORT": site_secrets.get_int("smtp_port", 587),
        "ADMIN_RATE_LIMIT": site_secrets.get_int("admin_rate_limit", 100),
        "CONTACT_RATE_LIMIT": site_secrets.get_int("contact_rate_limit", 5),
        "RATE_LIMIT_ENABLED": os.environ.get("DISABLE_RATE_LIMIT", "").lower() != "true",
        # Largest single upload plus room for the multipart envelope
        "MAX_CONTENT_LENGTH": AUDIO_POLICY.max_bytes + MiB,
        "CONFIGURE_LOGGING": True,
        "RUN_STARTUP_CHECKS": True,
    }


def _register_request_logging(app):
    @app.before_request
    def _log_request_start():
        request._start_time = time.time()

    @app.after_request
    def _log_request_end(response):
        if hasattr(request, "_start_time"):
            duration_ms = round((time.time() - request._start_time) * 1000, 1)
            # Skip health/audio spam
            if request.path != "/api/health" and not request.path.startswith("/work/"):
                log.info("%s %s → %d (%.0fms)",
                         request.method, request.path, response.status_code, duration_ms,
                         extra={"route": request.path, "method": request.method,
                                "status": response.status_code, "duration_ms": duration_ms,
                                "remote_addr": request.remote_addr})
        return response


def _register_error_handlers(app):
    @app.errorhandler(RequestEntityTooLarge)
    def _too_large(e):
        if request.path.startswith("/admin/about"):
            return redirect(url_for("admin.about", error="File too large"))
        if request.path.startswith("/admin/work"):
            return redirect(url_for("admin.work", error="File too large"))
        return e

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return e
        log.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": "Internal server error"}), 500


def create_app(overrides=None):
    """Application factory."""
    config = load_config()
    config.update(overrides or {})

    if config.get("CONFIGURE_LOGGING"):
        setup_logging(log_dir=paths.logs_dir(config["DATA_DIR"]))

    app = Flask(__name__)
    app.config.update(config)

    # ── Data dir init (never overwrites operator edits) ──────────────────────
    paths.seed_data_dir(app.config["DATA_DIR"], app.config["WORK_DIR"])
    content = ContentStore(app.config["DATA_DIR"], app.config["WORK_DIR"])
    content.reload()
    app.extensions["portfolio.content"] = content

    mailer = ContactMailer(app.config)
    app.extensions["portfolio.mailer"] = mailer

    app.register_blueprint(create_site_blueprint(content, mailer))
    app.register_blueprint(create_admin_blueprint(content, on_change=content.reload))

    init_security(app)
    _register_request_logging(app)
    _register_error_handlers(app)

    if app.config.get("RUN_STARTUP_CHECKS"):
        site_secrets.startup_check()
        checks = run_startup_checks(app, content)
        if checks["failed"] > 0:
            log.error("STARTUP: %d checks FAILED — review logs", checks["failed"])

    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port, debug=False)
