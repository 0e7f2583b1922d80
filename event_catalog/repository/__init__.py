"""In-memory catalog repository."""

from .data_manager import CatalogRepository

__all__ = ["CatalogRepository"]
