"""
portfolio/core/paths.py — Centralized Path Configuration

Single source of truth for the data directory layout. The app factory resolves
DATA_DIR / WORK_DIR once and everything else derives its paths from the
ContentStore built on top of them.

Layout under DATA_DIR:
    bio.json                {"en": str, "fr": str}
    tracks.json             {"tracks": [{"filename", "title"}, ...]}
    locales/{en,fr}.json    nested translation trees
    images/profile.webp     profile photo
    work/                   audio files (unless PORTFOLIO_WORK_DIR overrides)
    logs/                   rotating log files
"""

import os
import json
import shutil
import logging

log = logging.getLogger("portfolio.paths")

# ── Project Root ──────────────────────────────────────────────────────────────
_THIS_FILE = os.path.abspath(__file__)
PACKAGE_ROOT = os.path.dirname(os.path.dirname(_THIS_FILE))
PROJECT_ROOT = os.path.dirname(PACKAGE_ROOT)

# ── Seed data bundled with the package (never written to) ────────────────────
SEED_DIR = os.path.join(PACKAGE_ROOT, "seed_data")
SEED_LOCALES_DIR = os.path.join(SEED_DIR, "locales")

AUDIO_EXTENSIONS = (".mp3", ".wav", ".ogg", ".m4a", ".flac")
LANGUAGES = ("en", "fr")


def resolve_data_dir() -> str:
    """PORTFOLIO_DATA_DIR env → <project>/data."""
    env_dir = os.environ.get("PORTFOLIO_DATA_DIR", "")
    if env_dir:
        return os.path.abspath(env_dir)
    return os.path.join(PROJECT_ROOT, "data")


def resolve_work_dir(data_dir: str) -> str:
    """PORTFOLIO_WORK_DIR env → <data_dir>/work."""
    env_dir = os.environ.get("PORTFOLIO_WORK_DIR", "")
    if env_dir:
        return os.path.abspath(env_dir)
    return os.path.join(data_dir, "work")


def locales_dir(data_dir: str) -> str:
    return os.path.join(data_dir, "locales")


def images_dir(data_dir: str) -> str:
    return os.path.join(data_dir, "images")


def logs_dir(data_dir: str) -> str:
    return os.path.join(data_dir, "logs")


def scan_audio_files(work_dir: str) -> list:
    """Audio files present in work_dir, sorted by name."""
    if not os.path.isdir(work_dir):
        return []
    return sorted(
        f for f in os.listdir(work_dir)
        if os.path.splitext(f)[1].lower() in AUDIO_EXTENSIONS
        and os.path.isfile(os.path.join(work_dir, f))
    )


# ── First-run seeding ────────────────────────────────────────────────────────

def _read_locale_bio(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            about = json.load(f).get("about") or {}
        return about.get("bio", "") if isinstance(about, dict) else ""
    except (OSError, ValueError, AttributeError):
        return ""


def seed_data_dir(data_dir: str, work_dir: str) -> list:
    """Create the data layout and fill in defaults for files that DON'T exist yet.

    Never overwrites operator edits. Returns the relative names of what was created.
    """
    created = []
    for d in (data_dir, locales_dir(data_dir), images_dir(data_dir), work_dir):
        if not os.path.isdir(d):
            os.makedirs(d, exist_ok=True)
            created.append(os.path.relpath(d, data_dir))

    for lang in LANGUAGES:
        src = os.path.join(SEED_LOCALES_DIR, f"{lang}.json")
        dst = os.path.join(locales_dir(data_dir), f"{lang}.json")
        if not os.path.exists(dst) and os.path.exists(src):
            shutil.copy2(src, dst)
            created.append(f"locales/{lang}.json")

    bio_path = os.path.join(data_dir, "bio.json")
    if not os.path.exists(bio_path):
        bio = {lang: _read_locale_bio(os.path.join(locales_dir(data_dir), f"{lang}.json"))
               for lang in LANGUAGES}
        with open(bio_path, "w", encoding="utf-8") as f:
            json.dump(bio, f, indent=2, ensure_ascii=False)
        created.append("bio.json")

    # Existing installs kept audio files loose in the work dir; adopt them in name order
    tracks_path = os.path.join(data_dir, "tracks.json")
    if not os.path.exists(tracks_path):
        tracks = [{"filename": f, "title": os.path.splitext(f)[0]}
                  for f in scan_audio_files(work_dir)]
        with open(tracks_path, "w", encoding="utf-8") as f:
            json.dump({"tracks": tracks}, f, indent=2, ensure_ascii=False)
        created.append("tracks.json")

    if created:
        log.info("Seeded data dir %s: %s", data_dir, ", ".join(created))
    return created


def validate_paths(data_dir: str, work_dir: str) -> dict:
    """Runtime validation — call at app startup to catch path issues early.

    Returns:
        {"ok": bool, "errors": [str], "warnings": [str], "resolved": {name: path}}
    """
    result = {"ok": True, "errors": [], "warnings": [], "resolved": {}}

    checks = {
        "DATA_DIR": (data_dir, True),
        "WORK_DIR": (work_dir, True),
        "LOCALES_DIR": (locales_dir(data_dir), True),
        "IMAGES_DIR": (images_dir(data_dir), True),
        "PROFILE_IMAGE": (os.path.join(images_dir(data_dir), "profile.webp"), False),
    }

    for name, (path, required) in checks.items():
        result["resolved"][name] = path
        if not os.path.exists(path):
            if required:
                result["errors"].append(f"{name} not found: {path}")
                result["ok"] = False
            else:
                result["warnings"].append(f"{name} not found: {path}")

    for name, path in (("DATA_DIR", data_dir), ("WORK_DIR", work_dir)):
        test_file = os.path.join(path, ".write_test")
        try:
            with open(test_file, "w") as f:
                f.write("ok")
            os.remove(test_file)
        except OSError as e:
            result["errors"].append(f"{name} not writable: {e}")
            result["ok"] = False

    return result
