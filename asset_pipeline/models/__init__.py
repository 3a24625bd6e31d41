"""Value models shared across the job pipeline."""

from asset_pipeline.models.temp_object import TempObject

__all__ = ["TempObject"]
