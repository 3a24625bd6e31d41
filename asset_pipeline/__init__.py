"""Lazy, composable fetch/process/encode job pipeline for binary assets.

The library does not configure logging on import. Host applications call
``configure_logging()`` once at startup, before building an App.
"""

from asset_pipeline.config import configure_logging
from asset_pipeline.models import TempObject
from asset_pipeline.services import App, Job

__all__ = ["App", "Job", "TempObject", "configure_logging"]
