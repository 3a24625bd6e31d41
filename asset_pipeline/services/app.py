"""App bundling the collaborators that jobs delegate work to."""

from typing import Any

from structlog import get_logger

from asset_pipeline.config.settings import Settings
from asset_pipeline.datastores import DataStore, FileDataStore, S3DataStore
from asset_pipeline.services.job import Job
from asset_pipeline.services.registries import (
    AnalyserRegistry,
    EncoderRegistry,
    ProcessorRegistry,
)

logger = get_logger(__name__)


class ConfigurationError(Exception):
    """Raised when settings are incomplete for the selected backend."""

    pass


class App:
    """Owning context for jobs.

    Holds the datastore plus the processor, encoder and analyser registries.
    Jobs can only be combined when they belong to the same App instance.
    """

    def __init__(
        self,
        datastore: DataStore,
        processors: ProcessorRegistry | None = None,
        encoders: EncoderRegistry | None = None,
        analysers: AnalyserRegistry | None = None,
        name: str = "default",
    ):
        """Initialize the app.

        Args:
            datastore: Backend that Fetch steps retrieve from
            processors: Processor registry, empty when omitted
            encoders: Encoder registry, empty when omitted
            analysers: Analyser registry, empty when omitted
            name: Label used in logs and repr
        """
        self.name = name
        self.datastore = datastore
        self.processors = processors if processors is not None else ProcessorRegistry()
        self.encoders = encoders if encoders is not None else EncoderRegistry()
        self.analysers = analysers if analysers is not None else AnalyserRegistry()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "App":
        """Build an app whose datastore matches the configured backend.

        Args:
            settings: Application settings
            **kwargs: Forwarded to the App constructor (registries, name)

        Raises:
            ConfigurationError: If required settings are missing
        """
        missing = settings.validate_datastore()
        if missing:
            logger.error("Datastore config incomplete", missing=missing)
            raise ConfigurationError(f"Missing: {', '.join(missing)}")

        datastore: DataStore
        if settings.datastore.backend == "s3":
            datastore = S3DataStore(
                settings.aws.bucket_name,
                settings.aws_key_prefix,
                region_name=settings.aws.region,
            )
        else:
            datastore = FileDataStore(
                settings.datastore.root_path,
                store_meta=settings.datastore.store_meta,
            )

        logger.info(
            "App configured",
            environment=settings.environment,
            backend=settings.datastore.backend,
        )
        return cls(datastore, **kwargs)

    def new_job(self) -> Job:
        return Job(self)

    def fetch(self, uid: str) -> Job:
        """Start a job that fetches uid from the datastore."""
        return self.new_job().fetch(uid)

    def store(self, data: bytes, meta: dict[str, Any] | None = None) -> str:
        return self.datastore.store(data, meta)

    def __repr__(self) -> str:
        return f"App(name={self.name!r})"
