"""
ContentStore — explicit data access for everything the pages render.

reload() reads bio, locales and tracks from disk and returns an immutable
SiteContent snapshot; get() returns the last snapshot. The public site calls
reload() at the start of every request so admin edits show up without a
restart, and the admin panel is handed reload() as its change callback.
"""

import os
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from . import paths
from .store import load_json, save_json
from .tracks import TrackRecord, TrackRegistry

log = logging.getLogger("portfolio.content")


@dataclass(frozen=True)
class SiteContent:
    translations: Mapping[str, dict]
    bio: Mapping[str, str]
    tracks: Tuple[TrackRecord, ...]

    def bio_for(self, lang: str) -> str:
        return self.bio.get(lang, "") or ""


class ContentStore:
    """Owns the data directory layout and the current SiteContent snapshot."""

    def __init__(self, data_dir: str, work_dir: str):
        self.data_dir = data_dir
        self.work_dir = work_dir
        self.bio_path = os.path.join(data_dir, "bio.json")
        self.tracks_path = os.path.join(data_dir, "tracks.json")
        self.locales_dir = paths.locales_dir(data_dir)
        self.images_dir = paths.images_dir(data_dir)
        self.profile_image_path = os.path.join(self.images_dir, "profile.webp")
        self.tracks = TrackRegistry(self.tracks_path, work_dir)
        self._snapshot: Optional[SiteContent] = None
        self._lock = threading.Lock()

    def locale_path(self, lang: str) -> str:
        return os.path.join(self.locales_dir, f"{lang}.json")

    # ── Reads ────────────────────────────────────────────────────────────────

    def load_bio(self) -> dict:
        bio = load_json(self.bio_path, default=None)
        if not isinstance(bio, dict):
            bio = {}
        return {lang: str(bio.get(lang) or "") for lang in paths.LANGUAGES}

    def load_locale(self, lang: str):
        return load_json(self.locale_path(lang), default={})

    def reload(self) -> SiteContent:
        snapshot = SiteContent(
            translations=MappingProxyType({lang: self.load_locale(lang) for lang in paths.LANGUAGES}),
            bio=MappingProxyType(self.load_bio()),
            tracks=tuple(self.tracks.load()),
        )
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def get(self) -> SiteContent:
        with self._lock:
            snapshot = self._snapshot
        return snapshot if snapshot is not None else self.reload()

    # ── Writes (whole-document) ──────────────────────────────────────────────

    def save_bio(self, en: str, fr: str) -> dict:
        bio = {"en": (en or "").strip(), "fr": (fr or "").strip()}
        save_json(self.bio_path, bio)
        log.info("Bio saved (en=%d chars, fr=%d chars)", len(bio["en"]), len(bio["fr"]))
        return bio

    def save_translations(self, documents: Mapping[str, object]) -> None:
        for lang, doc in documents.items():
            save_json(self.locale_path(lang), doc)
        log.info("Translations saved: %s", ", ".join(documents))
