"""Application settings and configuration management."""
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class AWSSettings(BaseSettings):
    """AWS service configuration for the S3 datastore."""

    region: str = "eu-west-2"
    bucket_name: str = ""
    key_prefix: str = "{env}/assets/"

    model_config = SettingsConfigDict(env_prefix="AWS_")


class DatastoreSettings(BaseSettings):
    """Datastore backend selection."""

    backend: Literal["file", "s3"] = "file"
    root_path: Path = Path("./var/datastore")
    store_meta: bool = True  # Write a JSON sidecar next to each stored file

    model_config = SettingsConfigDict(env_prefix="DATASTORE_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False

    # Sub-settings
    aws: AWSSettings = AWSSettings()
    datastore: DatastoreSettings = DatastoreSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def validate_datastore(self) -> list[str]:
        """Validate required vars for the selected datastore. Returns list of missing var names."""
        missing = []
        if self.datastore.backend == "s3" and not self.aws.bucket_name.strip():
            missing.append("AWS_BUCKET_NAME")
        return missing

    @property
    def aws_key_prefix(self) -> str:
        """Get S3 key prefix with environment interpolation."""
        return self.aws.key_prefix.replace("{env}", self.environment)


# Global settings instance
settings = Settings()
