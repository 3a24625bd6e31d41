"""Datastore backends."""

from asset_pipeline.datastores.base import DataNotFound, DataStore, DataStoreError
from asset_pipeline.datastores.file_datastore import FileDataStore
from asset_pipeline.datastores.s3_datastore import S3DataStore

__all__ = [
    "DataStore",
    "DataStoreError",
    "DataNotFound",
    "FileDataStore",
    "S3DataStore",
]
