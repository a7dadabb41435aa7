# This project was developed with assistance from AI tools.
"""Phone-number canonicalization used for guardian matching."""

import re

PHONE_KEY_LENGTH = 10

_STRIP_RE = re.compile(r"[\s+\-]")


def normalize_phone(phone: str | None) -> str:
    """Return the comparison key for a phone number.

    Strips whitespace, ``+`` and ``-`` and keeps the last 10 characters, so
    ``"+91 98765-43210"`` and ``"9876543210"`` share a key. Absent input, or
    input shorter than 10 characters once stripped, yields ``""``. Never raises.
    """
    if not phone or not isinstance(phone, str):
        return ""
    stripped = _STRIP_RE.sub("", phone)
    if len(stripped) < PHONE_KEY_LENGTH:
        return ""
    return stripped[-PHONE_KEY_LENGTH:]


def phones_match(key: str, *candidates: str | None) -> bool:
    """True when any candidate normalizes to ``key``. An empty key matches nothing."""
    if not key:
        return False
    return any(normalize_phone(c) == key for c in candidates)
