"""Enrichment Service - Validate, scrape, merge and store a profile.

This module handles:
- Coercing the raw request body into an EnrichmentRequest
- Scraping the full name from the submitted profile URL
- Merging and handing the result to the profile store

Interface Contract:
- enrich(payload) -> EnrichedProfile
- Raises ValidationError for bad input, EnrichmentError for scrape failures
"""

from __future__ import annotations

import logging
from typing import Any

from profile_enricher.models import EnrichedProfile
from profile_enricher.services.persistence_service import BaseProfileStore, SimulatedProfileStore
from profile_enricher.services.validation_service import normalize_url, validate_enrichment_request
from profile_enricher.web_scraper import ProfileScraper


logger = logging.getLogger(__name__)


class EnrichmentService:
    """One-shot enrichment pipeline; holds no per-request state."""

    def __init__(self, scraper: ProfileScraper | None = None, store: BaseProfileStore | None = None):
        """Initialize with optional collaborators.

        Args:
            scraper: Profile page scraper. If None, uses a default ProfileScraper.
            store: Profile sink. If None, uses SimulatedProfileStore.
        """
        self.scraper = scraper or ProfileScraper()
        self.store = store or SimulatedProfileStore()

    def enrich(self, payload: Any) -> EnrichedProfile:
        """Run the full pipeline for one submission.

        Args:
            payload: Decoded JSON request body

        Returns:
            EnrichedProfile: The stored, merged record

        Raises:
            ValidationError: If the submission is rejected
            EnrichmentError: If the profile page cannot yield a name
        """
        request = validate_enrichment_request(payload)
        logger.info("[enrich] start username=%s url=%s", request.username, request.profile_url)

        # sourceProfile keeps the submitted spelling; the fetch uses the normalized one
        full_name = self.scraper.scrape_full_name(normalize_url(request.profile_url))

        profile = EnrichedProfile.from_request(request, full_name)
        logger.info("[enrich] combined username=%s full_name=%s", profile.username, profile.full_name)

        saved = self.store.save(profile)
        logger.info("[enrich] done username=%s", saved.username)
        return saved
