"""
portfolio/core/startup_checks.py — Runtime Self-Test on App Boot

Runs from create_app() after the Blueprints are registered:

  1. Path resolution — data/work dirs exist and are writable
  2. Data documents — bio.json, tracks.json, locales parse
  3. Track integrity — every registry entry has a file on disk
  4. Config — ADMIN_PASS set, mail relay configured
  5. Route integrity — every /admin rule goes through the admin gate

Never fatal: failures are logged so a misconfigured deploy is obvious.
"""

import json
import logging
import os

from .paths import LANGUAGES, validate_paths

log = logging.getLogger("portfolio.startup")


def run_startup_checks(app, content) -> dict:
    """Run all startup validation checks.

    Returns:
        {"passed": int, "failed": int, "warnings": int, "details": [...]}
    """
    results = {"passed": 0, "failed": 0, "warnings": 0, "details": []}

    def _pass(msg):
        results["passed"] += 1
        results["details"].append(("PASS", msg))
        log.info("%s", msg)

    def _fail(msg):
        results["failed"] += 1
        results["details"].append(("FAIL", msg))
        log.error("STARTUP CHECK FAILED: %s", msg)

    def _warn(msg):
        results["warnings"] += 1
        results["details"].append(("WARN", msg))
        log.warning("%s", msg)

    # ── 1. Paths ──────────────────────────────────────────────────────────────
    path_result = validate_paths(content.data_dir, content.work_dir)
    if path_result["ok"]:
        _pass(f"All paths valid (DATA_DIR={content.data_dir})")
    for err in path_result["errors"]:
        _fail(err)
    for warn in path_result["warnings"]:
        _warn(warn)

    # ── 2. Data documents ─────────────────────────────────────────────────────
    documents = [content.bio_path, content.tracks_path] + [content.locale_path(lang) for lang in LANGUAGES]
    for path in documents:
        name = os.path.relpath(path, content.data_dir)
        try:
            with open(path, encoding="utf-8") as f:
                json.load(f)
            _pass(f"{name} readable")
        except FileNotFoundError:
            _warn(f"{name} missing")
        except (OSError, ValueError) as e:
            _fail(f"{name} unreadable: {e}")

    # ── 3. Track integrity ────────────────────────────────────────────────────
    missing = [t.filename for t in content.tracks.load()
               if not os.path.isfile(os.path.join(content.work_dir, t.filename))]
    if missing:
        _warn(f"{len(missing)} track(s) without a file: {', '.join(missing[:5])}")
    else:
        _pass("Every track has a file")

    # ── 4. Config ─────────────────────────────────────────────────────────────
    if app.config.get("ADMIN_PASS"):
        _pass("Admin password configured")
    else:
        _fail("ADMIN_PASS not set — admin panel will answer 500")

    if app.config.get("MAIL_USER") and app.config.get("MAIL_PASSWORD"):
        _pass("Mail relay configured")
    else:
        _warn("Mail relay disabled (MAIL_USER / MAIL_PASSWORD not set)")

    # ── 5. Route integrity ────────────────────────────────────────────────────
    unguarded = [r.rule for r in app.url_map.iter_rules()
                 if r.rule.startswith("/admin") and not r.endpoint.startswith("admin.")]
    if unguarded:
        _fail(f"Admin routes outside the admin Blueprint: {', '.join(unguarded)}")
    else:
        _pass("All /admin routes behind the admin gate")

    log.info("Startup checks: %d passed, %d failed, %d warnings",
             results["passed"], results["failed"], results["warnings"])
    return results
