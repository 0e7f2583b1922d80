"""
Exception hierarchy for the event catalog.

Fetch and transformation failures propagate to the repository's caller;
lookups never raise (they return None) and scheduling problems are logged
as warnings only.
"""


class CatalogError(Exception):
    """Base class for every error raised by the catalog."""


class FetchError(CatalogError):
    """Raised when the source payload could not be retrieved."""

    def __init__(self, source_id: str, errors: list[str] | None = None):
        self.source_id = source_id
        self.errors = list(errors or [])
        detail = "; ".join(self.errors) if self.errors else "no payload returned"
        super().__init__(f"Failed to fetch catalog from '{source_id}': {detail}")


class TransformationError(CatalogError):
    """Raised when one entity type of the payload could not be transformed."""

    def __init__(self, entity_type: str, message: str):
        self.entity_type = entity_type
        super().__init__(f"Failed to transform {entity_type}: {message}")
