"""Loader for the packaged catalog configuration (stream keys, defaults)."""

from functools import lru_cache
from pathlib import Path

import yaml

from event_catalog.configs.settings import get_settings


class Config:
    """Static configuration for the event catalog."""

    CONFIG_DIR = Path(__file__).parent.resolve()
    DEFAULT_CATALOG_CONFIG_PATH = CONFIG_DIR / "catalog.yaml"

    @classmethod
    def get_catalog_config_path(cls) -> Path:
        """Return the configured catalog YAML path, or the packaged default."""
        path = get_settings().CATALOG_CONFIG_PATH
        return path if path.exists() else cls.DEFAULT_CATALOG_CONFIG_PATH

    @classmethod
    @lru_cache
    def load_catalog_config(cls) -> dict:
        """Load the YAML configuration for normalization and scheduling."""
        path = cls.get_catalog_config_path()
        if not path.exists():
            raise FileNotFoundError(f"Missing config at {path}")

        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def stream_category_keys(cls) -> dict[str, str]:
        """Return the stream title -> category key table."""
        streams = cls.load_catalog_config().get("streams", {})
        return dict(streams.get("category_keys", {}))

    @classmethod
    def default_stream_key(cls) -> str:
        """Return the key used for stream titles missing from the table."""
        streams = cls.load_catalog_config().get("streams", {})
        return streams.get("default_key", "PROGRAMMING")

    @classmethod
    def default_block_minutes(cls) -> int:
        """Return the length given to a time block without any end time."""
        scheduling = cls.load_catalog_config().get("scheduling", {})
        return int(scheduling.get("default_block_minutes", 60))
