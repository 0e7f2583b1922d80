"""
Unit tests for the api_adapter module.

Tests for APIAdapterConfig and APIAdapter. Requests are served by
httpx.MockTransport; no network access.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from event_catalog.ingestion.adapters.api_adapter import APIAdapter, APIAdapterConfig
from event_catalog.ingestion.adapters.base_adapter import SourceType

# =============================================================================
# TEST DATA
# =============================================================================


MOCK_PAYLOAD = {"data": {"speakers": [{"id": 1, "displayName": "Ada"}], "schedule": []}}


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def api_config():
    """Create a basic API adapter config."""
    return APIAdapterConfig(
        source_id="test_api",
        source_type=SourceType.API,
        base_url="https://hooks.example.com/catalog",
        request_timeout=5.0,
    )


def make_adapter(config, handler):
    """Create an adapter whose requests are answered by handler."""
    return APIAdapter(config, transport=httpx.MockTransport(handler))


# =============================================================================
# TEST CLASSES
# =============================================================================


class TestAPIAdapterConfig:
    """Tests for APIAdapterConfig dataclass."""

    def test_default_values(self):
        """Should have sensible defaults."""
        config = APIAdapterConfig(
            source_id="test", source_type=SourceType.API, base_url="https://x.example.com"
        )
        assert config.api_key is None
        assert config.headers == {}
        assert config.request_timeout == 30.0

    def test_source_type_forced_to_api(self):
        """Should set source_type to API whatever was passed."""
        config = APIAdapterConfig(
            source_id="test", source_type=SourceType.FILE, base_url="https://x.example.com"
        )
        assert config.source_type == SourceType.API


class TestAPIAdapterInit:
    """Tests for APIAdapter initialization."""

    def test_init(self, api_config):
        adapter = APIAdapter(api_config)
        assert adapter.api_config.base_url == "https://hooks.example.com/catalog"
        assert adapter._client is None

    def test_validate_config_requires_url(self):
        """Should raise ValueError if no URL provided."""
        config = APIAdapterConfig(source_id="test", source_type=SourceType.API)
        with pytest.raises(ValueError, match="requires base_url"):
            APIAdapter(config)


class TestAPIAdapterGetClient:
    """Tests for APIAdapter._get_client."""

    def test_returns_same_client(self, api_config):
        adapter = APIAdapter(api_config)
        assert adapter._get_client() is adapter._get_client()

    def test_headers(self):
        """Should send JSON accept, custom headers and a bearer token."""
        config = APIAdapterConfig(
            source_id="test",
            source_type=SourceType.API,
            base_url="https://x.example.com",
            api_key="secret",
            headers={"X-Custom": "value"},
        )
        client = APIAdapter(config)._get_client()
        assert client.headers["accept"] == "application/json"
        assert client.headers["x-custom"] == "value"
        assert client.headers["authorization"] == "Bearer secret"


class TestAPIAdapterFetch:
    """Tests for APIAdapter.fetch."""

    def test_success(self, api_config):
        """Should return the decoded payload."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=MOCK_PAYLOAD)

        adapter = make_adapter(api_config, handler)
        result = asyncio.run(adapter.fetch())

        assert result.success is True
        assert result.source_type == SourceType.API
        assert result.payload == MOCK_PAYLOAD
        assert result.metadata["status_code"] == 200
        assert result.fetch_ended_at >= result.fetch_started_at
        assert len(seen) == 1
        assert seen[0].method == "GET"

    def test_http_error_status(self, api_config):
        """Should report a non-success status without raising."""
        adapter = make_adapter(api_config, lambda request: httpx.Response(503))
        result = asyncio.run(adapter.fetch())

        assert result.success is False
        assert result.payload == {}
        assert "HTTP 503" in result.errors[0]

    def test_no_retry(self, api_config):
        """Should make exactly one request on failure."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        asyncio.run(make_adapter(api_config, handler).fetch())
        assert len(calls) == 1

    def test_timeout(self, api_config):
        """Should report a timeout as a failed fetch."""

        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        result = asyncio.run(make_adapter(api_config, handler).fetch())
        assert result.success is False
        assert "timed out" in result.errors[0]

    def test_invalid_json(self, api_config):
        """Should report an undecodable body."""
        adapter = make_adapter(api_config, lambda request: httpx.Response(200, text="<html>"))
        result = asyncio.run(adapter.fetch())
        assert result.success is False
        assert result.errors

    def test_non_object_json(self, api_config):
        """Should reject a JSON body that is not an object."""
        adapter = make_adapter(api_config, lambda request: httpx.Response(200, json=[1, 2]))
        result = asyncio.run(adapter.fetch())
        assert result.success is False
        assert "Expected a JSON object" in result.errors[0]

    def test_uses_configured_timeout(self, api_config):
        """Should pass the configured timeout to the request."""
        adapter = APIAdapter(api_config)
        response = httpx.Response(
            200, json=MOCK_PAYLOAD, request=httpx.Request("GET", api_config.base_url)
        )
        client = adapter._get_client()

        with patch.object(client, "get", new=AsyncMock(return_value=response)) as mock_get:
            asyncio.run(adapter.fetch())

        mock_get.assert_awaited_once_with(api_config.base_url, timeout=5.0)


class TestAPIAdapterClose:
    """Tests for APIAdapter.close."""

    def test_close_resets_client(self, api_config):
        adapter = APIAdapter(api_config)
        adapter._get_client()
        asyncio.run(adapter.close())
        assert adapter._client is None

    def test_close_without_client(self, api_config):
        """Should be a no-op when no client was created."""
        asyncio.run(APIAdapter(api_config).close())
