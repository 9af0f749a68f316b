"""
Shared pytest fixtures for the portfolio test suite.

Every test gets its own data/work directories under tmp_path and a fresh app
built by create_app(); nothing touches the real data/ folder.
"""
import json
import os
import sys
import base64
import pytest

_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

ADMIN_USER = "admin"
ADMIN_PASS = "s3cret-pass"


# ── Temp data directory (per-test isolation) ──────────────────────────────────

@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    return str(d)


@pytest.fixture
def work_dir(data_dir):
    return os.path.join(data_dir, "work")


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    from portfolio.core.security import _limiter
    _limiter.reset()
    yield
    _limiter.reset()


# ── Flask app + clients ───────────────────────────────────────────────────────

def _basic_auth_header(user=ADMIN_USER, pw=ADMIN_PASS):
    creds = base64.b64encode(f"{user}:{pw}".encode()).decode()
    return {"Authorization": f"Basic {creds}"}


class AuthenticatedClient:
    """Wraps Flask test client to add Basic Auth headers to every request."""
    def __init__(self, client, headers):
        self._client = client
        self._headers = headers

    def get(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.get(*args, **kwargs)

    def post(self, *args, **kwargs):
        kwargs.setdefault("headers", {}).update(self._headers)
        return self._client.post(*args, **kwargs)


@pytest.fixture
def app_config(data_dir, work_dir):
    """Overrides for create_app(); tests may mutate before requesting `app`."""
    return {
        "TESTING": True,
        "SECRET_KEY": "test",
        "ADMIN_USER": ADMIN_USER,
        "ADMIN_PASS": ADMIN_PASS,
        "DATA_DIR": data_dir,
        "WORK_DIR": work_dir,
        "MAIL_USER": "",
        "MAIL_PASSWORD": "",
        "CONTACT_RECIPIENT": "",
        "CONFIGURE_LOGGING": False,
        "RUN_STARTUP_CHECKS": False,
    }


@pytest.fixture
def app(app_config):
    """Create Flask app configured for testing."""
    from app import create_app
    return create_app(app_config)


@pytest.fixture
def content(app):
    return app.extensions["portfolio.content"]


@pytest.fixture
def client(app):
    """Authenticated Flask test client (HTTP Basic Auth on every request)."""
    with app.test_client() as c:
        yield AuthenticatedClient(c, _basic_auth_header())


@pytest.fixture
def anon_client(app):
    """Unauthenticated test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def auth_header():
    return _basic_auth_header


# ── Seed helpers ──────────────────────────────────────────────────────────────

def _write_json(path, obj):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f)


def _read_json(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def read_json():
    return _read_json


@pytest.fixture
def seed_tracks(app, content):
    """Three tracks in the registry, each with a file on disk."""
    names = ["intro.mp3", "middle.wav", "outro.flac"]
    os.makedirs(content.work_dir, exist_ok=True)
    for n in names:
        with open(os.path.join(content.work_dir, n), "wb") as f:
            f.write(b"\x00" * 16)
    _write_json(content.tracks_path, {"tracks": [
        {"filename": n, "title": os.path.splitext(n)[0].title()} for n in names
    ]})
    return names
