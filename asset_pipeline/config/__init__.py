"""Configuration package."""

from asset_pipeline.config.logging import configure_logging, get_logger
from asset_pipeline.config.settings import Settings, settings

__all__ = ["settings", "Settings", "configure_logging", "get_logger"]
