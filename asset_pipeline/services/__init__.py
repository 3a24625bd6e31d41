"""Business services package."""

from asset_pipeline.services.app import App, ConfigurationError
from asset_pipeline.services.job import Job
from asset_pipeline.services.registries import (
    AnalyserRegistry,
    EncoderRegistry,
    ProcessorRegistry,
    RegistryError,
    UnknownAnalyser,
    UnknownEncoder,
    UnknownProcessor,
)

__all__ = [
    "App",
    "ConfigurationError",
    "Job",
    "ProcessorRegistry",
    "EncoderRegistry",
    "AnalyserRegistry",
    "RegistryError",
    "UnknownProcessor",
    "UnknownEncoder",
    "UnknownAnalyser",
]
