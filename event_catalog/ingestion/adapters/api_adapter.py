"""
API Source Adapter.

Fetches the catalog payload from an HTTP endpoint (webhook) with a single
timed GET request. There is no retry; a failed request fails the fetch.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

import httpx

from .base_adapter import AdapterConfig, BaseSourceAdapter, FetchResult, SourceType

logger = logging.getLogger(__name__)


@dataclass
class APIAdapterConfig(AdapterConfig):
    """Configuration for the webhook adapter."""

    base_url: str = ""
    api_key: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Set source type to API."""
        self.source_type = SourceType.API


class APIAdapter(BaseSourceAdapter):
    """
    Adapter for the catalog webhook.

    The response body must be a JSON object; anything else is reported as a
    failed fetch.
    """

    def __init__(
        self,
        config: APIAdapterConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API adapter.

        Args:
            config: APIAdapterConfig with endpoint settings
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        super().__init__(config)

    @property
    def api_config(self) -> APIAdapterConfig:
        """Get typed config."""
        return self.config  # type: ignore[return-value]

    def _validate_config(self) -> None:
        """Validate API configuration."""
        if not self.api_config.base_url:
            raise ValueError("API adapter requires base_url")

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            headers = {
                "Accept": "application/json",
                **self.api_config.headers,
            }
            if self.api_config.api_key:
                headers["Authorization"] = f"Bearer {self.api_config.api_key}"
            self._client = httpx.AsyncClient(headers=headers, transport=self._transport)
        return self._client

    async def fetch(self) -> FetchResult:
        """
        Fetch the catalog payload from the webhook.

        Returns:
            FetchResult with the decoded payload, or errors on failure
        """
        fetch_started = datetime.now(UTC)
        payload: dict = {}
        errors: list[str] = []
        metadata: dict = {"url": self.api_config.base_url}

        try:
            response = await self._get_client().get(
                self.api_config.base_url,
                timeout=self.api_config.request_timeout,
            )
            metadata["status_code"] = response.status_code
            response.raise_for_status()

            body = response.json()
            if not isinstance(body, dict):
                raise ValueError(f"Expected a JSON object, got {type(body).__name__}")
            payload = body

        except httpx.TimeoutException as e:
            logger.error(f"Catalog request timed out after {self.api_config.request_timeout}s: {e}")
            errors.append(f"Request timed out: {e}")
        except httpx.HTTPStatusError as e:
            logger.error(f"Catalog request returned HTTP {e.response.status_code}")
            errors.append(f"HTTP {e.response.status_code}: {e}")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"API fetch failed: {e}")
            errors.append(str(e))

        return FetchResult(
            success=not errors,
            source_type=SourceType.API,
            payload=payload,
            errors=errors,
            metadata=metadata,
            fetch_started_at=fetch_started,
            fetch_ended_at=datetime.now(UTC),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
