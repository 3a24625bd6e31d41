"""Filesystem datastore keeping payloads under a root directory."""

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from structlog import get_logger

from asset_pipeline.datastores.base import DataNotFound, DataStoreError

logger = get_logger(__name__)

META_SUFFIX = ".meta.json"


class FileDataStore:
    """Stores each payload as a file at ``<root>/YYYY/MM/DD/<hex>``."""

    def __init__(self, root_path: str | Path, store_meta: bool = True):
        """Initialize the datastore.

        Args:
            root_path: Directory all payloads live under
            store_meta: Write a JSON sidecar with the meta passed to store()
        """
        self.root_path = Path(root_path)
        self.store_meta = store_meta

    def store(self, data: bytes, meta: dict[str, Any] | None = None) -> str:
        """Write a payload and return its uid.

        Raises:
            DataStoreError: If the file cannot be written
        """
        now = datetime.utcnow()
        uid = f"{now:%Y/%m/%d}/{uuid.uuid4().hex}"
        path = self._path_for(uid)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
            if self.store_meta:
                meta_path = path.with_name(path.name + META_SUFFIX)
                meta_path.write_text(
                    json.dumps({**(meta or {}), "stored_at": now.isoformat()}, default=str)
                )
        except OSError as e:
            path.unlink(missing_ok=True)
            logger.error("Failed to store data", uid=uid, error=str(e))
            raise DataStoreError(f"Failed to store data as {uid}: {e}") from e

        logger.info("Stored data", uid=uid, size=len(data))
        return uid

    def retrieve(self, uid: str) -> bytes:
        """Read the payload stored under uid.

        Raises:
            DataNotFound: If nothing is stored under uid
        """
        path = self._path_for(uid)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise DataNotFound(f"No data stored as {uid!r}") from e
        except OSError as e:
            raise DataStoreError(f"Failed to read {uid!r}: {e}") from e

    def retrieve_meta(self, uid: str) -> dict[str, Any]:
        """Read the JSON meta sidecar for uid, or an empty dict if none was written."""
        path = self._path_for(uid)
        meta_path = path.with_name(path.name + META_SUFFIX)
        if not meta_path.exists():
            return {}
        return json.loads(meta_path.read_text())

    def destroy(self, uid: str) -> None:
        """Delete the payload and its meta sidecar.

        Raises:
            DataNotFound: If nothing is stored under uid
        """
        path = self._path_for(uid)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise DataNotFound(f"No data stored as {uid!r}") from e
        path.with_name(path.name + META_SUFFIX).unlink(missing_ok=True)
        logger.info("Destroyed data", uid=uid)

    def _path_for(self, uid: str) -> Path:
        root = self.root_path.resolve()
        path = (root / uid).resolve()
        if not path.is_relative_to(root) or path == root:
            raise DataStoreError(f"Invalid uid {uid!r}: resolves outside the datastore root")
        return path
