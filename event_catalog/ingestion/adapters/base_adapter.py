"""
Base Source Adapter.

Abstract base class defining the interface for catalog source adapters.
Each adapter fetches one raw catalog payload (`{"data": {...}}`) from its
source and reports the outcome as a FetchResult.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class SourceType(str, Enum):
    """Type of data source."""

    API = "api"
    FILE = "file"


@dataclass
class FetchResult:
    """
    Result of a data fetch operation.

    Adapters never raise from fetch(); failures are reported through
    `success=False` and `errors`.
    """

    success: bool
    source_type: SourceType
    payload: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    fetch_started_at: datetime | None = None
    fetch_ended_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate fetch duration."""
        if self.fetch_started_at and self.fetch_ended_at:
            return (self.fetch_ended_at - self.fetch_started_at).total_seconds()
        return 0.0


@dataclass
class AdapterConfig:
    """
    Base configuration for source adapters.

    Extended by specific adapter types (API, local file).
    """

    source_id: str
    source_type: SourceType
    request_timeout: float = 30.0
    custom_config: dict[str, Any] = field(default_factory=dict)


class BaseSourceAdapter(ABC):
    """
    Abstract base class for source adapters.

    Subclasses must implement:
        - fetch(): Fetch the raw payload from the source
        - _validate_config(): Validate adapter-specific configuration
    """

    def __init__(self, config: AdapterConfig):
        """
        Initialize the adapter.

        Args:
            config: AdapterConfig with source-specific settings

        Raises:
            ValueError: If configuration is invalid
        """
        self.config = config
        self.logger = logging.getLogger(f"event_catalog.adapter.{config.source_id}")
        self._validate_config()

    @property
    def source_type(self) -> SourceType:
        """Get the source type."""
        return self.config.source_type

    @property
    def source_id(self) -> str:
        """Get the source identifier."""
        return self.config.source_id

    @abstractmethod
    async def fetch(self) -> FetchResult:
        """
        Fetch the raw catalog payload.

        Returns:
            FetchResult with the payload and timing metadata
        """

    @abstractmethod
    def _validate_config(self) -> None:
        """
        Validate adapter-specific configuration.

        Raises:
            ValueError: If configuration is invalid
        """

    async def close(self) -> None:
        """Release any resources held by the adapter."""

    async def __aenter__(self) -> "BaseSourceAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
