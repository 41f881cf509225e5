"""Profile Enrichment Service package."""

from .models import EnrichedProfile, EnrichmentRequest
from .services import EnrichmentService, ValidationError
from .web_scraper import EnrichmentError, ProfileScraper, extract_heading

__all__ = [
    "EnrichmentRequest",
    "EnrichedProfile",
    "EnrichmentService",
    "ValidationError",
    "EnrichmentError",
    "ProfileScraper",
    "extract_heading",
]
