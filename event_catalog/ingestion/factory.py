"""Build the source adapter selected by the settings."""

import logging

from event_catalog.configs.settings import Settings, get_settings

from .adapters import (
    APIAdapter,
    APIAdapterConfig,
    BaseSourceAdapter,
    FileAdapterConfig,
    LocalFileAdapter,
    SourceType,
)

logger = logging.getLogger(__name__)


def create_adapter(settings: Settings | None = None) -> BaseSourceAdapter:
    """
    Create the adapter for `settings.DATA_SOURCE`.

    Args:
        settings: Settings to use; defaults to get_settings()

    Returns:
        APIAdapter for "webhook", LocalFileAdapter for "local"

    Raises:
        ValueError: If the selected source is missing its location
    """
    settings = settings or get_settings()

    if settings.DATA_SOURCE == "local":
        logger.info(f"Using local catalog file {settings.LOCAL_DATA_PATH}")
        return LocalFileAdapter(
            FileAdapterConfig(
                source_id="local",
                source_type=SourceType.FILE,
                path=settings.LOCAL_DATA_PATH,
            )
        )

    api_key = settings.API_KEY.get_secret_value() if settings.API_KEY else None
    logger.info(f"Using catalog webhook {settings.WEBHOOK_URL}")
    return APIAdapter(
        APIAdapterConfig(
            source_id="webhook",
            source_type=SourceType.API,
            request_timeout=settings.REQUEST_TIMEOUT,
            base_url=settings.WEBHOOK_URL,
            api_key=api_key,
        )
    )
