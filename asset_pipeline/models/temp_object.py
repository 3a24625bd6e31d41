"""Immutable container for the binary payload passed between job steps."""

from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, ConfigDict


class TempObject(BaseModel):
    """Opaque binary artifact produced by a job step.

    Instances are frozen: every transformation builds a new TempObject
    rather than editing an existing one.
    """

    data: bytes

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_file(cls, path: str | Path) -> "TempObject":
        """Build a TempObject from the contents of a file.

        Args:
            path: File to read

        Returns:
            New TempObject holding the file's bytes
        """
        return cls(data=Path(path).read_bytes())

    @property
    def size(self) -> int:
        """Payload length in bytes."""
        return len(self.data)

    def to_file(self, path: str | Path) -> Path:
        """Write the payload to a file, creating parent directories.

        Args:
            path: Destination file

        Returns:
            The written path
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)
        return path

    def chunks(self, chunk_size: int = 8192) -> Iterator[bytes]:
        """Iterate over the payload in fixed-size chunks."""
        for offset in range(0, len(self.data), chunk_size):
            yield self.data[offset:offset + chunk_size]

    def __repr__(self) -> str:
        return f"TempObject(size={self.size})"
