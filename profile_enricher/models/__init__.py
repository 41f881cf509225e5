"""Data models - Pure data structures with no business logic."""

from .profile import EnrichmentRequest, EnrichedProfile

__all__ = [
    "EnrichmentRequest",
    "EnrichedProfile",
]
