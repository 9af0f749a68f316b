"""
Upload Handler — size/MIME-checked persistence of admin uploads.

Two policies:
  IMAGE_POLICY  profile photo, always saved as images/profile.webp
  AUDIO_POLICY  portfolio tracks, saved under their sanitized original name

The MIME type is the one the browser declared for the part, the same thing
the admin sees in their file picker.
"""

import os
import logging
from dataclasses import dataclass
from typing import FrozenSet

log = logging.getLogger("portfolio.uploads")

MiB = 1024 * 1024


class UploadError(Exception):
    """Upload rejected; the message is shown to the admin as-is."""


class FileTooLarge(UploadError):
    def __init__(self, message: str = "File too large"):
        super().__init__(message)


@dataclass(frozen=True)
class UploadPolicy:
    field: str
    max_bytes: int
    allowed_types: FrozenSet[str]
    allowed_label: str


IMAGE_POLICY = UploadPolicy(
    field="photo",
    max_bytes=5 * MiB,
    allowed_types=frozenset({"image/webp", "image/jpeg", "image/png", "image/gif"}),
    allowed_label="webp, jpeg, png, gif",
)

AUDIO_POLICY = UploadPolicy(
    field="audio",
    max_bytes=50 * MiB,
    allowed_types=frozenset({"audio/mpeg", "audio/wav", "audio/ogg", "audio/mp4",
                             "audio/flac", "audio/x-flac"}),
    allowed_label="mp3, wav, ogg, m4a, flac",
)


def _stream_size(storage) -> int:
    stream = storage.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def check_upload(storage, policy: UploadPolicy) -> None:
    """Raise UploadError unless storage is a non-empty file allowed by policy."""
    if storage is None or not storage.filename:
        raise UploadError("No file uploaded")
    if storage.mimetype not in policy.allowed_types:
        raise UploadError(f"Invalid file type. Allowed: {policy.allowed_label}")
    if _stream_size(storage) > policy.max_bytes:
        raise FileTooLarge()


def save_upload(storage, policy: UploadPolicy, target_dir: str, filename: str) -> str:
    """Validate and write storage to target_dir/filename, overwriting. Returns the path."""
    check_upload(storage, policy)
    os.makedirs(target_dir, exist_ok=True)
    path = os.path.join(target_dir, filename)
    storage.save(path)
    log.info("Upload saved: %s (%s, policy=%s)", filename, storage.mimetype, policy.field)
    return path
