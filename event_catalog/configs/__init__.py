"""Settings and static configuration."""

from .config import Config
from .settings import Settings, get_settings

__all__ = ["Config", "Settings", "get_settings"]
