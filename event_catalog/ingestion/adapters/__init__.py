"""Source adapters for the catalog payload."""

from .api_adapter import APIAdapter, APIAdapterConfig
from .base_adapter import AdapterConfig, BaseSourceAdapter, FetchResult, SourceType
from .file_adapter import FileAdapterConfig, LocalFileAdapter

__all__ = [
    "APIAdapter",
    "APIAdapterConfig",
    "AdapterConfig",
    "BaseSourceAdapter",
    "FetchResult",
    "FileAdapterConfig",
    "LocalFileAdapter",
    "SourceType",
]
