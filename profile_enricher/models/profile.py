"""Profile data models.

Pure data structures with no business logic.
Attributes are snake_case; the JSON wire format uses camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EnrichmentRequest:
    """A validated profile submission."""
    username: str
    email: str
    profile_url: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "username": self.username,
            "email": self.email,
            "profileUrl": self.profile_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnrichmentRequest":
        """Create from dictionary."""
        return cls(
            username=data.get("username", ""),
            email=data.get("email", ""),
            profile_url=data.get("profileUrl", ""),
        )


@dataclass
class EnrichedProfile:
    """Submitted fields merged with the name scraped from the profile page."""
    username: str
    email: str
    full_name: str
    source_profile: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "username": self.username,
            "email": self.email,
            "fullName": self.full_name,
            "sourceProfile": self.source_profile,
        }

    @classmethod
    def from_request(cls, request: EnrichmentRequest, full_name: str) -> "EnrichedProfile":
        """Merge a submission with the extracted name."""
        return cls(
            username=request.username,
            email=request.email,
            full_name=full_name,
            source_profile=request.profile_url,
        )
