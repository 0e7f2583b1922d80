"""Catalog ingestion: source adapters and their factory."""

from .adapters import (
    APIAdapter,
    APIAdapterConfig,
    AdapterConfig,
    BaseSourceAdapter,
    FetchResult,
    FileAdapterConfig,
    LocalFileAdapter,
    SourceType,
)
from .factory import create_adapter

__all__ = [
    "APIAdapter",
    "APIAdapterConfig",
    "AdapterConfig",
    "BaseSourceAdapter",
    "FetchResult",
    "FileAdapterConfig",
    "LocalFileAdapter",
    "SourceType",
    "create_adapter",
]
