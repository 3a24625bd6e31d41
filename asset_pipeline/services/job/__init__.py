"""Job pipeline: step records, the lazy job and its errors."""

from .errors import (
    AppDoesNotMatch,
    EmptyJob,
    InvalidSerializedJob,
    JobError,
    NothingToAnalyse,
    NothingToEncode,
    NothingToProcess,
)
from .job import Job
from .steps import Encode, Fetch, Process, Step

__all__ = [
    "Job",
    "Step",
    "Fetch",
    "Process",
    "Encode",
    "JobError",
    "AppDoesNotMatch",
    "NothingToProcess",
    "NothingToEncode",
    "NothingToAnalyse",
    "InvalidSerializedJob",
    "EmptyJob",
]
