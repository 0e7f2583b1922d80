"""
Local File Adapter.

Reads the catalog payload from a JSON file on disk, for offline use and
development against a saved snapshot of the webhook response.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from .base_adapter import AdapterConfig, BaseSourceAdapter, FetchResult, SourceType

logger = logging.getLogger(__name__)


@dataclass
class FileAdapterConfig(AdapterConfig):
    """Configuration for the local file adapter."""

    path: Path = Path("catalog.json")

    def __post_init__(self):
        self.source_type = SourceType.FILE
        self.path = Path(self.path)


class LocalFileAdapter(BaseSourceAdapter):
    """Adapter that loads the payload from a local JSON file."""

    @property
    def file_config(self) -> FileAdapterConfig:
        return self.config  # type: ignore[return-value]

    def _validate_config(self) -> None:
        if not str(self.file_config.path):
            raise ValueError("Local file adapter requires a path")

    def _read(self) -> dict:
        with open(self.file_config.path, encoding="utf-8") as f:
            body = json.load(f)
        if not isinstance(body, dict):
            raise ValueError(f"Expected a JSON object, got {type(body).__name__}")
        return body

    async def fetch(self) -> FetchResult:
        fetch_started = datetime.now(UTC)
        payload: dict = {}
        errors: list[str] = []

        try:
            payload = await asyncio.to_thread(self._read)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read catalog file {self.file_config.path}: {e}")
            errors.append(str(e))

        return FetchResult(
            success=not errors,
            source_type=SourceType.FILE,
            payload=payload,
            errors=errors,
            metadata={"path": str(self.file_config.path)},
            fetch_started_at=fetch_started,
            fetch_ended_at=datetime.now(UTC),
        )
