"""Persistence Service - Storage sink for enriched profiles.

Interface Contract:
- save(profile) -> EnrichedProfile (the same record, unchanged)

Only a simulated store exists: it waits a fixed delay and keeps nothing.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod

from config import PERSIST_DELAY_SECONDS
from profile_enricher.models import EnrichedProfile


logger = logging.getLogger(__name__)


class BaseProfileStore(ABC):
    """Abstract base class for profile stores."""

    @abstractmethod
    def save(self, profile: EnrichedProfile) -> EnrichedProfile:
        """Persist an enriched profile.

        Args:
            profile: The record to store

        Returns:
            EnrichedProfile: The stored record
        """
        pass


class SimulatedProfileStore(BaseProfileStore):
    """Stand-in for a database: sleeps, logs and returns the input."""

    def __init__(self, delay: float = PERSIST_DELAY_SECONDS):
        self.delay = delay

    def save(self, profile: EnrichedProfile) -> EnrichedProfile:
        logger.info("[store] simulating save profile=%s", json.dumps(profile.to_dict()))
        if self.delay > 0:
            time.sleep(self.delay)
        logger.info("[store] saved username=%s (simulated)", profile.username)
        return profile
