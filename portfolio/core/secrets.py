"""
secrets.py — Centralized credential and settings registry

Single source of truth for everything the site reads from the environment.

Env vars:
  ADMIN_USER          — Admin panel username (default "admin")
  ADMIN_PASS          — Admin panel password (required for /admin)
  SECRET_KEY          — Flask secret key
  MAIL_USER           — SMTP login / sender address
  MAIL_PASSWORD       — SMTP password (app password for Gmail)
  CONTACT_RECIPIENT   — Where contact form mail is delivered (default MAIL_USER)
  SMTP_HOST           — SMTP server (default smtp.gmail.com)
  SMTP_PORT           — SMTP port (default 587, STARTTLS)
  ADMIN_RATE_LIMIT    — Admin requests per minute per client (default 100)
  CONTACT_RATE_LIMIT  — Contact submissions per 30s per client (default 5)

Security:
  - Values are never logged in full (masked to first chars)
  - Sensitive values report only set / not set
  - Validate on startup — warn loudly about missing keys
"""

import os
import logging

log = logging.getLogger("portfolio.secrets")

# ─── Secret Definitions ─────────────────────────────────────────────────────

_REGISTRY = {
    "admin_user": {
        "env": "ADMIN_USER",
        "required": True,
        "desc": "Admin panel username",
        "default": "admin",
    },
    "admin_pass": {
        "env": "ADMIN_PASS",
        "required": True,
        "desc": "Admin panel password",
        "sensitive": True,
    },
    "secret_key": {
        "env": "SECRET_KEY",
        "required": False,
        "desc": "Flask session signing key",
        "sensitive": True,
    },
    "mail_user": {
        "env": "MAIL_USER",
        "required": False,
        "desc": "SMTP login and sender address",
    },
    "mail_password": {
        "env": "MAIL_PASSWORD",
        "required": False,
        "desc": "SMTP password",
        "sensitive": True,
    },
    "contact_recipient": {
        "env": "CONTACT_RECIPIENT",
        "fallback": "MAIL_USER",
        "required": False,
        "desc": "Contact form recipient address",
    },
    "smtp_host": {
        "env": "SMTP_HOST",
        "required": False,
        "desc": "SMTP server host",
        "default": "smtp.gmail.com",
    },
    "smtp_port": {
        "env": "SMTP_PORT",
        "required": False,
        "desc": "SMTP server port",
        "default": "587",
    },
    "admin_rate_limit": {
        "env": "ADMIN_RATE_LIMIT",
        "required": False,
        "desc": "Admin requests per minute per client",
        "default": "100",
    },
    "contact_rate_limit": {
        "env": "CONTACT_RATE_LIMIT",
        "required": False,
        "desc": "Contact submissions per 30 seconds per client",
        "default": "5",
    },
}


# ─── Public API ──────────────────────────────────────────────────────────────

def get_key(name: str) -> str:
    """Get a value by registry name. Returns empty string if not set."""
    entry = _REGISTRY.get(name)
    if not entry:
        log.warning("Unknown secret requested: %s", name)
        return ""

    val = os.environ.get(entry["env"], "")
    if not val and "fallback" in entry:
        val = os.environ.get(entry["fallback"], "")
    if not val and "default" in entry:
        val = entry["default"]
    return val


def get_int(name: str, default: int = 0) -> int:
    """Integer setting; a malformed value logs a warning and yields the default."""
    raw = get_key(name)
    try:
        return int(raw)
    except (TypeError, ValueError):
        log.warning("Ignoring non-integer %s=%r, using %d", _REGISTRY[name]["env"], raw, default)
        return default


def mask(value: str) -> str:
    """Mask a secret for safe logging. Shows first 8 chars."""
    if not value:
        return "(not set)"
    if len(value) <= 12:
        return value[:4] + "****"
    return value[:8] + "****" + f"({len(value)} chars)"


def validate_all() -> dict:
    """Validate all settings. Returns status report."""
    results = {}
    warnings = []
    for name, entry in _REGISTRY.items():
        val = get_key(name)
        is_set = bool(val)
        results[name] = {
            "set": is_set,
            "env": entry["env"],
            "desc": entry["desc"],
            "masked": mask(val) if not entry.get("sensitive") else ("set" if is_set else "not set"),
            "required": entry.get("required", False),
        }
        if entry.get("required") and not is_set:
            warnings.append(f"REQUIRED secret missing: {entry['env']} ({entry['desc']})")

    return {
        "secrets": results,
        "total": len(results),
        "set": sum(1 for r in results.values() if r["set"]),
        "missing": sum(1 for r in results.values() if not r["set"]),
        "warnings": warnings,
    }


def startup_check():
    """Run on startup. Logs warnings for missing critical secrets."""
    report = validate_all()
    log.info("Secrets: %d/%d configured", report["set"], report["total"])
    for w in report["warnings"]:
        log.warning("SECRET: %s", w)
    return report
