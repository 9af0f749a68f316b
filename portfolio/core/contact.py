"""Contact form validation."""

import re
from dataclasses import dataclass, field
from typing import List

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SERVICES = ("mixing", "mastering", "production", "recording")

MAX_EMAIL = 254
MAX_BAND_NAME = 200
MAX_SONGS = 20
MAX_LINKS = 2000
MAX_MESSAGE = 5000


class ContactValidationError(ValueError):
    """First failing rule; str(e) is returned to the client."""


@dataclass
class ContactSubmission:
    email: str
    message: str
    band_name: str = ""
    number_of_songs: str = ""
    links: str = ""
    services: List[str] = field(default_factory=list)


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ContactValidationError(f"Invalid {key}")
    return str(value).strip()


def _services(value) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    picked = []
    for s in value:
        if isinstance(s, str) and s in SERVICES and s not in picked:
            picked.append(s)
    return picked


def validate_contact(payload) -> ContactSubmission:
    """Build a ContactSubmission from the JSON body or raise ContactValidationError.

    Unknown service values are dropped without complaint.
    """
    if not isinstance(payload, dict):
        payload = {}

    email = _text(payload, "email")
    if not email:
        raise ContactValidationError("Email is required")
    if len(email) > MAX_EMAIL:
        raise ContactValidationError("Email is too long")
    if not EMAIL_RE.match(email):
        raise ContactValidationError("Invalid email address")

    band_name = _text(payload, "bandName")
    if len(band_name) > MAX_BAND_NAME:
        raise ContactValidationError("Band name is too long")

    number_of_songs = _text(payload, "numberOfSongs")
    if len(number_of_songs) > MAX_SONGS:
        raise ContactValidationError("Number of songs is too long")

    links = _text(payload, "links")
    if len(links) > MAX_LINKS:
        raise ContactValidationError("Links are too long")

    message = _text(payload, "message")
    if not message:
        raise ContactValidationError("Message is required")
    if len(message) > MAX_MESSAGE:
        raise ContactValidationError("Message is too long")

    return ContactSubmission(
        email=email,
        message=message,
        band_name=band_name,
        number_of_songs=number_of_songs,
        links=links,
        services=_services(payload.get("services")),
    )
