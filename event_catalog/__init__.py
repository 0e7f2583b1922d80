"""
Event catalog.

Ingests an event-catalog payload, normalizes it into deduplicated entities
and groups sessions into chronological time blocks.
"""

from event_catalog.exceptions import CatalogError, FetchError, TransformationError
from event_catalog.ingestion.factory import create_adapter
from event_catalog.normalization.transformer import CatalogTransformer, TransformedCatalog
from event_catalog.repository.data_manager import CatalogRepository
from event_catalog.scheduling.time_blocks import DayPeriod, TimeBlockScheduler

__version__ = "0.1.0"

__all__ = [
    "CatalogError",
    "CatalogRepository",
    "CatalogTransformer",
    "DayPeriod",
    "FetchError",
    "TimeBlockScheduler",
    "TransformationError",
    "TransformedCatalog",
    "create_adapter",
]
