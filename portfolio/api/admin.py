"""
Admin panel — bio, profile photo, audio tracks, raw translation JSON.

Every route sits behind security.admin_gate (rate limit, then Basic auth).
Mutating POSTs redirect back to their page with ?message= or ?error=.
After any write the on_change callback fires so the content snapshot used
by the public site is refreshed.
"""

import os
import json
import logging

from flask import Blueprint, redirect, render_template_string, request, url_for

from ..core.paths import LANGUAGES
from ..core.security import admin_gate
from ..core.tracks import TrackError, sanitize_filename, title_from_filename, validate_filename
from ..core.uploads import AUDIO_POLICY, IMAGE_POLICY, UploadError, save_upload
from .templates import (ADMIN_FOOT, ADMIN_HEAD, PAGE_ADMIN_ABOUT, PAGE_ADMIN_TRANSLATIONS,
                        PAGE_ADMIN_WORK)

log = logging.getLogger("portfolio.admin")


def render(content, **kw):
    kw.setdefault("message", request.args.get("message"))
    kw.setdefault("error", request.args.get("error"))
    return render_template_string(ADMIN_HEAD + content + ADMIN_FOOT, **kw)


def create_admin_blueprint(content, on_change=None):
    """content: ContentStore; on_change: called with no arguments after every write."""
    bp = Blueprint("admin", __name__, url_prefix="/admin")
    bp.before_request(admin_gate)

    def _changed():
        if on_change is not None:
            on_change()

    def _done(endpoint, message):
        return redirect(url_for(endpoint, message=message))

    def _failed(endpoint, error):
        return redirect(url_for(endpoint, error=error))

    # ── About ────────────────────────────────────────────────────────────────

    @bp.route("/")
    def home():
        return redirect(url_for("admin.about"))

    @bp.route("/about")
    def about():
        return render(PAGE_ADMIN_ABOUT, page="about", bio=content.load_bio(),
                      has_photo=os.path.exists(content.profile_image_path))

    @bp.route("/about/bio", methods=["POST"])
    def save_bio():
        content.save_bio(request.form.get("bioEn", ""), request.form.get("bioFr", ""))
        _changed()
        return _done("admin.about", "Bio saved successfully")

    @bp.route("/about/photo", methods=["POST"])
    def upload_photo():
        try:
            save_upload(request.files.get(IMAGE_POLICY.field), IMAGE_POLICY,
                        content.images_dir, os.path.basename(content.profile_image_path))
        except UploadError as e:
            log.warning("Photo upload rejected: %s", e)
            return _failed("admin.about", str(e))
        return _done("admin.about", "Photo updated successfully")

    # ── Work ─────────────────────────────────────────────────────────────────

    @bp.route("/work")
    def work():
        return render(PAGE_ADMIN_WORK, page="work", tracks=content.tracks.load())

    @bp.route("/work/upload", methods=["POST"])
    def upload_track():
        storage = request.files.get(AUDIO_POLICY.field)
        filename = sanitize_filename(storage.filename if storage else "")
        if storage is not None and storage.filename:
            try:
                validate_filename(filename, content.work_dir)
            except TrackError as e:
                return _failed("admin.work", str(e))
        try:
            save_upload(storage, AUDIO_POLICY, content.work_dir, filename)
        except UploadError as e:
            log.warning("Track upload rejected: %s", e)
            return _failed("admin.work", str(e))
        content.tracks.add(filename, title_from_filename(filename))
        _changed()
        return _done("admin.work", "Track uploaded successfully")

    @bp.route("/work/delete", methods=["POST"])
    def delete_track():
        try:
            content.tracks.remove(request.form.get("filename", ""))
        except TrackError as e:
            return _failed("admin.work", str(e))
        _changed()
        return _done("admin.work", "Track deleted successfully")

    @bp.route("/work/update", methods=["POST"])
    def update_track():
        try:
            content.tracks.rename(request.form.get("filename", ""), request.form.get("title", ""))
        except TrackError as e:
            return _failed("admin.work", str(e))
        _changed()
        return _done("admin.work", "Track updated successfully")

    @bp.route("/work/reorder", methods=["POST"])
    def reorder_track():
        try:
            moved = content.tracks.move(request.form.get("filename", ""),
                                        request.form.get("direction", ""))
        except TrackError as e:
            return _failed("admin.work", str(e))
        if moved:
            _changed()
        return _done("admin.work", "Track order updated")

    # ── Translations ─────────────────────────────────────────────────────────

    @bp.route("/translations", methods=["GET", "POST"])
    def translations():
        if request.method == "POST":
            try:
                documents = {lang: json.loads(request.form.get(lang, ""))
                             for lang in LANGUAGES}
            except ValueError:
                return _failed("admin.translations", "Invalid JSON format")
            content.save_translations(documents)
            _changed()
            return _done("admin.translations", "Translations saved successfully")

        return render(
            PAGE_ADMIN_TRANSLATIONS, page="translations",
            en_json=json.dumps(content.load_locale("en"), indent=2, ensure_ascii=False),
            fr_json=json.dumps(content.load_locale("fr"), indent=2, ensure_ascii=False),
        )

    return bp
