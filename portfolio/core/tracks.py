"""
Track Registry — the ordered audio portfolio.

tracks.json holds {"tracks": [{"filename", "title"}, ...]}; list order is the
display order on the public page. Every mutation rewrites the whole document.

Filenames coming back from the admin UI are untrusted: validate_filename()
rejects separators and parent references before anything touches the disk,
then checks the resolved path still lives inside the work directory.
"""

import os
import re
import logging
from dataclasses import dataclass, asdict
from typing import List, Optional
from urllib.parse import quote

from .store import load_json, save_json

log = logging.getLogger("portfolio.tracks")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
MAX_TITLE_LENGTH = 200
DIRECTIONS = ("up", "down")


class TrackError(Exception):
    """Base for user-visible track registry failures."""


class InvalidFilename(TrackError):
    pass


class TrackNotFound(TrackError):
    pass


@dataclass(frozen=True)
class TrackRecord:
    filename: str
    title: str

    @classmethod
    def from_dict(cls, d: dict) -> "TrackRecord":
        filename = str(d.get("filename", ""))
        return cls(filename=filename, title=str(d.get("title") or title_from_filename(filename)))

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def url(self) -> str:
        return "/work/" + quote(self.filename)


def sanitize_filename(name: str) -> str:
    """Replace every character outside [A-Za-z0-9._-] with an underscore."""
    return _UNSAFE_CHARS.sub("_", name or "")


def title_from_filename(filename: str) -> str:
    return os.path.splitext(filename)[0]


def validate_filename(filename: str, work_dir: str) -> str:
    """Return the absolute path for filename inside work_dir.

    Raises InvalidFilename for empty names, separators or "..", before any
    filesystem access, and when the resolved path escapes work_dir.
    """
    if not filename or "/" in filename or "\\" in filename or ".." in filename:
        raise InvalidFilename("Invalid filename")
    root = os.path.realpath(work_dir)
    path = os.path.realpath(os.path.join(root, filename))
    if os.path.dirname(path) != root:
        raise InvalidFilename("Invalid path")
    return path


def public_tracks(tracks) -> List[dict]:
    """[{url, title}] in registry order, as the landing page consumes it."""
    return [{"url": t.url, "title": t.title} for t in tracks]


class TrackRegistry:
    """Ordered {filename, title} records persisted in tracks.json."""

    def __init__(self, tracks_path: str, work_dir: str):
        self.tracks_path = tracks_path
        self.work_dir = work_dir

    # ── Persistence ──────────────────────────────────────────────────────────

    def load(self) -> List[TrackRecord]:
        doc = load_json(self.tracks_path, default={}) or {}
        raw = doc.get("tracks") if isinstance(doc, dict) else None
        if not isinstance(raw, list):
            return []
        return [TrackRecord.from_dict(t) for t in raw if isinstance(t, dict) and t.get("filename")]

    def save(self, tracks: List[TrackRecord]) -> None:
        save_json(self.tracks_path, {"tracks": [t.to_dict() for t in tracks]})

    # ── Mutations ────────────────────────────────────────────────────────────

    def add(self, filename: str, title: Optional[str] = None) -> TrackRecord:
        """Append a record, or retitle in place when the file was re-uploaded."""
        record = TrackRecord(filename=filename, title=title or title_from_filename(filename))
        tracks = self.load()
        for i, t in enumerate(tracks):
            if t.filename == filename:
                tracks[i] = record
                log.info("Track replaced: %s", filename)
                break
        else:
            tracks.append(record)
            log.info("Track added: %s (%d total)", filename, len(tracks))
        self.save(tracks)
        return record

    def remove(self, filename: str) -> bool:
        """Drop the record, then best-effort delete the file.

        Returns True when a file was removed from disk. A record that is not in
        the registry is an error; a file that is already gone is not.
        """
        path = validate_filename(filename, self.work_dir)
        tracks = self.load()
        remaining = [t for t in tracks if t.filename != filename]
        if len(remaining) == len(tracks):
            raise TrackNotFound("Track not found")
        self.save(remaining)

        try:
            os.remove(path)
        except FileNotFoundError:
            log.warning("Track %s removed from registry; file was already missing", filename)
            return False
        except OSError as e:
            log.warning("Track %s removed from registry; file not deleted: %s", filename, e)
            return False
        log.info("Track deleted: %s", filename)
        return True

    def rename(self, filename: str, title: str) -> TrackRecord:
        validate_filename(filename, self.work_dir)
        title = (title or "").strip()
        if not title:
            raise TrackError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise TrackError("Title is too long")

        tracks = self.load()
        for i, t in enumerate(tracks):
            if t.filename == filename:
                tracks[i] = TrackRecord(filename=filename, title=title)
                self.save(tracks)
                log.info("Track retitled: %s → %s", filename, title)
                return tracks[i]
        raise TrackNotFound("Track not found")

    def move(self, filename: str, direction: str) -> bool:
        """Swap with the neighbour in direction. Returns False at the edges (no-op)."""
        validate_filename(filename, self.work_dir)
        if direction not in DIRECTIONS:
            raise TrackError("Invalid direction")

        tracks = self.load()
        index = next((i for i, t in enumerate(tracks) if t.filename == filename), None)
        if index is None:
            raise TrackNotFound("Track not found")

        target = index - 1 if direction == "up" else index + 1
        if target < 0 or target >= len(tracks):
            return False
        tracks[index], tracks[target] = tracks[target], tracks[index]
        self.save(tracks)
        return True
