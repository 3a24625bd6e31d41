"""Datastore interface and errors."""

from typing import Any, Protocol


class DataStoreError(Exception):
    """Base exception for datastore errors."""

    pass


class DataNotFound(DataStoreError):
    """Raised when no data is stored under the requested uid."""

    pass


class DataStore(Protocol):
    """Storage backend a job fetches payloads from."""

    def store(self, data: bytes, meta: dict[str, Any] | None = None) -> str:
        ...

    def retrieve(self, uid: str) -> bytes:
        ...

    def destroy(self, uid: str) -> None:
        ...
