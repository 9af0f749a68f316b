"""
Public site: localized landing page, contact API, data-backed files.

Content is reloaded from the ContentStore at the start of every request and
kept on flask.g for the rest of it, so admin edits are live immediately.
"""

import logging

from flask import (Blueprint, abort, g, jsonify, render_template_string, request,
                   send_from_directory)

from ..core.contact import SERVICES, ContactValidationError, validate_contact
from ..core.i18n import negotiate_language, translate
from ..core.paths import LANGUAGES
from ..core.security import rate_limit
from ..core.tracks import InvalidFilename, public_tracks, validate_filename
from .templates import PAGE_INDEX

log = logging.getLogger("portfolio.site")

CONTACT_OK = "Message received! Thank you for reaching out."


def create_site_blueprint(content, mailer):
    """content: ContentStore; mailer: ContactMailer (or anything with relay())."""
    bp = Blueprint("site", __name__)

    @bp.before_request
    def _load_content():
        g.content = content.reload()

    def _render_index(path_lang=None):
        snapshot = g.content
        lang = negotiate_language(path_lang, request.accept_languages)

        def t(key):
            return translate(snapshot.translations, key, lang)

        return render_template_string(
            PAGE_INDEX,
            lang=lang,
            t=t,
            bio=snapshot.bio_for(lang) or t("about.bio"),
            tracks=public_tracks(snapshot.tracks),
            languages=LANGUAGES,
            services=SERVICES,
        )

    @bp.route("/")
    def index():
        return _render_index()

    @bp.route("/en")
    def index_en():
        return _render_index("en")

    @bp.route("/fr")
    def index_fr():
        return _render_index("fr")

    @bp.route("/api/contact", methods=["POST"])
    @rate_limit("contact")
    def api_contact():
        try:
            submission = validate_contact(request.get_json(silent=True))
        except ContactValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400

        log.info("Contact form submission from %s (services=%s)",
                 submission.email, ",".join(submission.services) or "-")
        mailer.relay(submission)
        return jsonify({"success": True, "message": CONTACT_OK})

    @bp.route("/api/health")
    def api_health():
        return jsonify({
            "status": "ok",
            "tracks": len(g.content.tracks),
            "mail_configured": bool(getattr(mailer, "configured", False)),
        })

    @bp.route("/work/<filename>")
    def work_file(filename):
        try:
            validate_filename(filename, content.work_dir)
        except InvalidFilename:
            abort(404)
        return send_from_directory(content.work_dir, filename)

    @bp.route("/images/profile.webp")
    def profile_image():
        return send_from_directory(content.images_dir, "profile.webp")

    return bp
