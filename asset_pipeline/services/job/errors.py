"""Exceptions raised by the job pipeline."""


class JobError(Exception):
    """Base exception for job pipeline errors."""

    pass


class AppDoesNotMatch(JobError):
    """Raised when combining jobs that belong to different apps."""

    pass


class NothingToProcess(JobError):
    """Raised when a process step runs before any temp object exists."""

    pass


class NothingToEncode(JobError):
    """Raised when an encode step runs before any temp object exists."""

    pass


class NothingToAnalyse(JobError):
    """Raised when analysing a job that has no temp object and no pending fetch."""

    pass


class InvalidSerializedJob(JobError):
    """Raised when a serialized job cannot be decoded into steps."""

    pass


class EmptyJob(JobError):
    """Raised when reading data from a job whose steps produced no temp object."""

    pass
