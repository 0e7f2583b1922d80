"""
Normalization of the raw catalog payload.

This package provides:
- standardize_*: pure per-entity standardization functions
- derive_category_key / map_stream_to_key: category key helpers
- strip_html: HTML to plain text
- CatalogTransformer: whole-payload transformation with duplicate resolution
"""

from .standardizer import (
    combine_position,
    derive_category_key,
    map_stream_to_key,
    parse_speaker_roles,
    select_thumbnail,
    standardize_category,
    standardize_event,
    standardize_room,
    standardize_schedule,
    standardize_session_type,
    standardize_speaker,
    standardize_stream,
)
from .text import strip_html
from .transformer import CatalogTransformer, TransformedCatalog, fold_if_absent, fold_records

__all__ = [
    "CatalogTransformer",
    "TransformedCatalog",
    "combine_position",
    "derive_category_key",
    "fold_if_absent",
    "fold_records",
    "map_stream_to_key",
    "parse_speaker_roles",
    "select_thumbnail",
    "standardize_category",
    "standardize_event",
    "standardize_room",
    "standardize_schedule",
    "standardize_session_type",
    "standardize_speaker",
    "standardize_stream",
    "strip_html",
]
