"""Validation Service - Boundary checks for profile submissions.

This module handles:
- Required field presence (username, email, profileUrl)
- Email shape check (permissive, not RFC 5322)
- Absolute URL check for profileUrl

Interface Contract:
- validate_enrichment_request(payload) -> EnrichmentRequest
- Raises a ValidationError subclass on the first failed check
- No side effects
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

from profile_enricher.models import EnrichmentRequest

REQUIRED_FIELDS = ["username", "email", "profileUrl"]

# local@domain.tld with no whitespace or extra @ in any part
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Schemes whose URLs must name a host
SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}

_SCHEME_PATTERN = re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*):(.*)", re.S)


class ValidationError(Exception):
    """Raised when a submission is rejected before enrichment."""
    message = "Invalid request"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    def to_dict(self) -> dict[str, Any]:
        """Error body returned to the client."""
        return {"error": str(self)}


class MissingFieldsError(ValidationError):
    message = "Missing required fields"

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self), "required": list(REQUIRED_FIELDS)}


class InvalidEmailError(ValidationError):
    message = "Invalid email format"


class InvalidUrlError(ValidationError):
    message = "Invalid URL format for profileUrl"


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def normalize_url(url: str) -> str | None:
    """Return url in fetchable form, or None if it is not an absolute URL.

    Permissive like a browser's URL parser: any well-formed scheme is
    accepted (``mailto:``, ``urn:``, ``file:///``...). Only the special
    schemes need a host, and for those ``http:example.com`` means
    ``http://example.com``.
    """
    match = _SCHEME_PATTERN.fullmatch(url.strip())
    if not match:
        return None
    scheme, rest = match.group(1).lower(), match.group(2)
    if scheme in SPECIAL_SCHEMES:
        rest = "//" + rest.lstrip("/\\")
    normalized = f"{scheme}:{rest}"
    try:
        parts = urlsplit(normalized)
        # Accessing .port raises ValueError on a malformed port
        parts.port
    except ValueError:
        return None
    if any(ch.isspace() for ch in parts.netloc):
        return None
    if scheme in SPECIAL_SCHEMES and not parts.hostname:
        return None
    return normalized


def is_absolute_url(url: str) -> bool:
    return normalize_url(url) is not None


def validate_enrichment_request(payload: Any) -> EnrichmentRequest:
    """Coerce a decoded JSON body into an EnrichmentRequest.

    Args:
        payload: The decoded request body (anything json.loads may return)

    Returns:
        EnrichmentRequest: The typed submission

    Raises:
        MissingFieldsError: A required field is absent, empty, or not a string
        InvalidEmailError: The email is not shaped like local@domain.tld
        InvalidUrlError: profileUrl is not an absolute URL
    """
    if not isinstance(payload, dict):
        payload = {}

    values = [payload.get(name) for name in REQUIRED_FIELDS]
    if not all(values) or not all(isinstance(v, str) for v in values):
        raise MissingFieldsError()

    if not is_valid_email(payload["email"]):
        raise InvalidEmailError()

    if not is_absolute_url(payload["profileUrl"]):
        raise InvalidUrlError()

    return EnrichmentRequest.from_dict(payload)
