"""Service layer - Business logic modules.

Each service module has a clear interface and can be developed/tested independently.
"""

from .enrichment_service import EnrichmentService
from .persistence_service import BaseProfileStore, SimulatedProfileStore
from .validation_service import (
    InvalidEmailError,
    InvalidUrlError,
    MissingFieldsError,
    ValidationError,
    normalize_url,
    validate_enrichment_request,
)

__all__ = [
    "EnrichmentService",
    "BaseProfileStore",
    "SimulatedProfileStore",
    "ValidationError",
    "MissingFieldsError",
    "InvalidEmailError",
    "InvalidUrlError",
    "normalize_url",
    "validate_enrichment_request",
]
