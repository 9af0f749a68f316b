"""Public site: landing page, language selection, contact API, file serving."""
import json
import os
from unittest import mock

import pytest

from portfolio.core.i18n import negotiate_language, translate


VALID = {"email": "band@example.com", "message": "We need a mix for our EP."}


def _contact(client, payload, **kw):
    return client.post("/api/contact", data=json.dumps(payload),
                       content_type="application/json", **kw)


# ═══════════════════════════════════════════════════════════════════════════════
# I18N
# ═══════════════════════════════════════════════════════════════════════════════

class TestTranslate:
    T = {"en": {"a": {"b": "deep", "empty": ""}, "top": "x"}, "fr": {"a": {"b": "profond"}}}

    def test_nested(self):
        assert translate(self.T, "a.b", "en") == "deep"
        assert translate(self.T, "a.b", "fr") == "profond"

    def test_missing_key_returns_key(self):
        assert translate(self.T, "a.nope", "en") == "a.nope"
        assert translate(self.T, "top.deeper", "en") == "top.deeper"
        assert translate(self.T, "a.b", "de") == "a.b"

    def test_empty_and_branch_values_return_key(self):
        assert translate(self.T, "a.empty", "en") == "a.empty"
        assert translate(self.T, "a", "en") == "a"


class TestNegotiate:

    def test_path_wins(self):
        from werkzeug.datastructures import LanguageAccept
        assert negotiate_language("fr", LanguageAccept([("en", 1)])) == "fr"

    def test_header(self):
        from werkzeug.datastructures import LanguageAccept
        assert negotiate_language(None, LanguageAccept([("fr", 1), ("en", 0.5)])) == "fr"

    def test_default(self):
        from werkzeug.datastructures import LanguageAccept
        assert negotiate_language(None, LanguageAccept([("de", 1)])) == "en"
        assert negotiate_language(None, None) == "en"


# ═══════════════════════════════════════════════════════════════════════════════
# PAGES
# ═══════════════════════════════════════════════════════════════════════════════

class TestPages:

    def test_index_defaults_to_english(self, anon_client):
        r = anon_client.get("/")
        assert r.status_code == 200
        assert b'lang="en"' in r.data
        assert b"Mixing" in r.data

    def test_accept_language(self, anon_client):
        r = anon_client.get("/", headers={"Accept-Language": "fr-FR,fr;q=0.9,en;q=0.5"})
        assert b'lang="fr"' in r.data

    def test_path_prefix_beats_header(self, anon_client):
        r = anon_client.get("/en", headers={"Accept-Language": "fr"})
        assert b'lang="en"' in r.data
        r = anon_client.get("/fr")
        assert b'lang="fr"' in r.data
        assert b"Envoyer" in r.data

    def test_missing_translation_shows_key(self, anon_client, content):
        with open(content.locale_path("en"), "w") as f:
            json.dump({"hero": {"name": "Only name"}}, f)
        r = anon_client.get("/en")
        assert r.status_code == 200
        assert b"Only name" in r.data
        assert b"hero.tagline" in r.data

    def test_bio_edits_visible_without_restart(self, anon_client, content):
        with open(content.bio_path, "w") as f:
            json.dump({"en": "Fresh English bio", "fr": "Bio toute neuve"}, f)
        assert b"Fresh English bio" in anon_client.get("/en").data
        assert "Bio toute neuve".encode() in anon_client.get("/fr").data

    def test_empty_bio_falls_back_to_locale(self, anon_client, content):
        with open(content.bio_path, "w") as f:
            json.dump({"en": "", "fr": ""}, f)
        assert b"Audio engineer and producer" in anon_client.get("/en").data

    def test_tracks_in_document_order(self, anon_client, seed_tracks):
        html = anon_client.get("/").data.decode()
        positions = [html.index(f"/work/{n}") for n in seed_tracks]
        assert positions == sorted(positions)

    def test_null_tracks_document_renders_empty(self, anon_client, content):
        with open(content.tracks_path, "w") as f:
            json.dump({"tracks": None}, f)
        assert anon_client.get("/").status_code == 200
        assert anon_client.get("/api/health").get_json()["tracks"] == 0

    def test_health(self, anon_client, seed_tracks):
        d = anon_client.get("/api/health").get_json()
        assert d == {"status": "ok", "tracks": 3, "mail_configured": False}

    def test_public_headers(self, anon_client):
        r = anon_client.get("/")
        assert r.headers["X-Frame-Options"] == "SAMEORIGIN"


class TestFiles:

    def test_serves_work_file(self, anon_client, seed_tracks):
        r = anon_client.get("/work/intro.mp3")
        assert r.status_code == 200
        assert r.data == b"\x00" * 16

    def test_work_traversal_404(self, anon_client):
        assert anon_client.get("/work/..%2Ftracks.json").status_code == 404

    def test_profile_image(self, anon_client, content):
        with open(content.profile_image_path, "wb") as f:
            f.write(b"img")
        assert anon_client.get("/images/profile.webp").data == b"img"

    def test_profile_image_missing(self, anon_client):
        assert anon_client.get("/images/profile.webp").status_code == 404


# ═══════════════════════════════════════════════════════════════════════════════
# CONTACT API
# ═══════════════════════════════════════════════════════════════════════════════

class TestContact:

    def test_missing_message(self, anon_client, app):
        mailer = app.extensions["portfolio.mailer"]
        with mock.patch.object(mailer, "send") as send:
            r = _contact(anon_client, {"email": "a@b.co"})
        assert r.status_code == 400
        assert r.get_json() == {"success": False, "error": "Message is required"}
        send.assert_not_called()

    @pytest.mark.parametrize("payload,error", [
        ({}, "Email is required"),
        ({"email": "not-an-email", "message": "hi"}, "Invalid email address"),
        ({"email": "a@b.co", "message": "x" * 5001}, "Message is too long"),
        ({"email": "a@b.co", "message": "hi", "bandName": "b" * 201}, "Band name is too long"),
        ({"email": "a@b.co", "message": "hi", "links": "l" * 2001}, "Links are too long"),
        ({"email": "a@b.co", "message": "hi", "numberOfSongs": "9" * 21}, "Number of songs is too long"),
        ({"email": ["a@b.co"], "message": "hi"}, "Invalid email"),
    ])
    def test_validation(self, anon_client, payload, error):
        r = _contact(anon_client, payload)
        assert r.status_code == 400
        assert r.get_json()["success"] is False
        assert r.get_json()["error"] == error

    def test_non_json_body(self, anon_client):
        r = anon_client.post("/api/contact", data="email=a@b.co", content_type="text/plain")
        assert r.status_code == 400

    def test_success_without_mail_credentials(self, anon_client, app):
        mailer = app.extensions["portfolio.mailer"]
        assert not mailer.configured
        with mock.patch("smtplib.SMTP") as smtp:
            r = _contact(anon_client, dict(VALID, bandName="The Band", numberOfSongs=4,
                                           services=["mixing", "juggling"]))
        assert r.status_code == 200
        body = r.get_json()
        assert body["success"] is True
        assert body["message"]
        smtp.assert_not_called()

    def test_relays_filtered_submission(self, anon_client, app):
        mailer = app.extensions["portfolio.mailer"]
        with mock.patch.object(mailer, "relay") as relay:
            r = _contact(anon_client, dict(VALID, services=["mastering", "bogus", "mixing"]))
        assert r.status_code == 200
        submission = relay.call_args[0][0]
        assert submission.email == "band@example.com"
        assert submission.services == ["mastering", "mixing"]

    def test_delivery_failure_still_succeeds(self, app_config):
        from app import create_app
        app_config.update(MAIL_USER="me@example.com", MAIL_PASSWORD="pw")
        app = create_app(app_config)
        mailer = app.extensions["portfolio.mailer"]
        threads = []
        real_relay = mailer.relay

        def _capture(submission):
            t = real_relay(submission)
            threads.append(t)
            return t

        with mock.patch("smtplib.SMTP", side_effect=OSError("connection refused")), \
                mock.patch.object(mailer, "relay", side_effect=_capture):
            with app.test_client() as c:
                r = _contact(c, VALID)
            for t in threads:
                t.join(5)
        assert r.status_code == 200
        assert r.get_json()["success"] is True

    def test_rate_limited(self, app_config):
        from app import create_app
        app_config["CONTACT_RATE_LIMIT"] = 2
        app = create_app(app_config)
        with app.test_client() as c:
            codes = [_contact(c, VALID).status_code for _ in range(3)]
            last = _contact(c, VALID)
        assert codes == [200, 200, 429]
        assert last.get_json()["success"] is False

    def test_default_contact_limit_stricter_than_admin(self, app):
        assert app.config["CONTACT_RATE_LIMIT"] < app.config["ADMIN_RATE_LIMIT"]


class TestErrors:

    def test_unhandled_error_is_json_500(self, app, content):
        with mock.patch.object(content, "reload", side_effect=RuntimeError("disk on fire")):
            with app.test_client() as c:
                r = c.get("/")
        assert r.status_code == 500
        assert r.get_json() == {"success": False, "error": "Internal server error"}

    def test_404_passes_through(self, anon_client):
        assert anon_client.get("/nope").status_code == 404
