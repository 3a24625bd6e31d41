"""Lazy, incrementally applied job built from fetch/process/encode steps."""

import base64
import json
import uuid
from typing import TYPE_CHECKING, Any, Iterable, assert_never

from structlog import get_logger

from asset_pipeline.models import TempObject
from asset_pipeline.services.job.errors import (
    AppDoesNotMatch,
    EmptyJob,
    InvalidSerializedJob,
    NothingToAnalyse,
    NothingToEncode,
    NothingToProcess,
)
from asset_pipeline.services.job.steps import (
    STEP_TYPES,
    Encode,
    Fetch,
    Process,
    Step,
)

if TYPE_CHECKING:
    from asset_pipeline.services.app import App

logger = get_logger(__name__)


class Job:
    """Ordered recipe of steps applied lazily against an app's collaborators.

    The job:
    1. Records steps without doing any work
    2. Applies pending steps in order only when asked (apply/data/analyse)
    3. Never re-applies a step that already ran
    4. Resumes from the failing step if an earlier apply raised
    """

    def __init__(self, app: "App"):
        """Initialize an empty job.

        Args:
            app: Owning app supplying datastore, processors, encoders and analysers
        """
        self._app = app
        self._steps: list[Step] = []
        self._temp_object: TempObject | None = None
        self._next_step = 0
        self.job_id = uuid.uuid4().hex[:12]
        self.logger = logger.bind(job_id=self.job_id)

    @property
    def app(self) -> "App":
        return self._app

    @property
    def steps(self) -> tuple[Step, ...]:
        """Read-only view of the recorded steps."""
        return tuple(self._steps)

    @property
    def temp_object(self) -> TempObject | None:
        """Current temp object, without forcing any pending steps."""
        return self._temp_object

    @property
    def cursor(self) -> int:
        """Number of leading steps already applied."""
        return self._next_step

    # Building

    def fetch(self, uid: Any) -> "Job":
        self._steps.append(Fetch(uid))
        return self

    def process(self, name: str, *params: Any) -> "Job":
        self._steps.append(Process(name, *params))
        return self

    def encode(self, format: str, *params: Any) -> "Job":
        self._steps.append(Encode(format, *params))
        return self

    def num_steps(self) -> int:
        return len(self._steps)

    # Application

    def apply(self) -> "Job":
        """Apply every pending step in order.

        The cursor moves past a step only once it has succeeded, so after a
        failure the temp object reflects the last successful step and a later
        call resumes at the step that raised.

        Returns:
            Self for method chaining
        """
        pending = self._steps[self._next_step:]
        if not pending:
            return self

        self.logger.info(
            "Applying job",
            pending_steps=len(pending),
            cursor=self._next_step,
        )

        for step in pending:
            self.logger.debug("Applying step", step=repr(step), index=self._next_step)
            try:
                self._temp_object = self._apply_step(step)
            except Exception as e:
                self.logger.error(
                    "Step failed",
                    step=repr(step),
                    index=self._next_step,
                    error=str(e),
                    exc_info=True,
                )
                raise
            self._next_step += 1

        self.logger.info(
            "Job applied",
            num_steps=len(self._steps),
            size=self._temp_object.size if self._temp_object is not None else None,
        )
        return self

    def already_applied(self) -> bool:
        return self._next_step == len(self._steps)

    def resulting_temp_object(self) -> TempObject | None:
        """Apply pending steps if needed and return the current temp object."""
        if not self.already_applied():
            self.apply()
        return self._temp_object

    def data(self) -> bytes:
        """Return the payload produced by the full recipe, applying it first if needed.

        Raises:
            EmptyJob: If the job has no steps that produce a temp object
        """
        temp_object = self.resulting_temp_object()
        if temp_object is None:
            raise EmptyJob("Job has no data because it has no steps. Need to fetch first?")
        return temp_object.data

    def analyse(self, *args: Any) -> Any:
        """Analyse the resulting temp object with the app's analysers.

        A job is eligible when it already holds a temp object or when one of its
        pending steps is a fetch that will produce one.

        Args:
            *args: Analyser name followed by its arguments

        Returns:
            Whatever the analyser returns

        Raises:
            NothingToAnalyse: If no temp object exists or is pending
        """
        if self._temp_object is None and not self._has_pending_fetch():
            raise NothingToAnalyse(
                "Can't analyse because temp object has not been initialized. Need to fetch first?"
            )
        return self._app.analysers.analyse(self.data(), *args)

    # Combination

    def combine(self, other: "Job") -> "Job":
        """Return a new unapplied job running this job's steps followed by other's.

        Raises:
            AppDoesNotMatch: If the jobs belong to different apps
        """
        if self._app is not other.app:
            raise AppDoesNotMatch(
                f"Cannot add jobs belonging to different apps ({self._app!r} is not {other.app!r})"
            )
        new_job = self.__class__(self._app)
        new_job._steps = self._steps + list(other.steps)
        return new_job

    __add__ = combine

    # Serialization

    def to_list(self) -> list[list[Any]]:
        return [step.to_list() for step in self._steps]

    def serialize(self) -> str:
        """Encode the full recipe as URL-safe base64 JSON."""
        payload = json.dumps(self.to_list(), separators=(",", ":"))
        return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")

    @classmethod
    def from_list(cls, app: "App", steps: Iterable[Any]) -> "Job":
        """Build an unapplied job from ``[[tag, *args], ...]``.

        Raises:
            InvalidSerializedJob: If an entry is malformed or has an unknown tag
        """
        job = cls(app)
        for entry in steps:
            if not isinstance(entry, (list, tuple)) or len(entry) < 2:
                raise InvalidSerializedJob(f"Malformed step entry: {entry!r}")
            tag, *args = entry
            step_type = STEP_TYPES.get(tag) if isinstance(tag, str) else None
            if step_type is None:
                raise InvalidSerializedJob(f"Unknown step tag: {tag!r}")
            job._steps.append(step_type(*args))
        return job

    @classmethod
    def deserialize(cls, app: "App", string: str) -> "Job":
        """Rebuild a job from the output of serialize().

        Raises:
            InvalidSerializedJob: If the string is not a serialized job
        """
        try:
            steps = json.loads(base64.urlsafe_b64decode(string.encode("ascii")))
        except ValueError as e:
            raise InvalidSerializedJob(f"Could not decode serialized job: {e}") from e
        if not isinstance(steps, list):
            raise InvalidSerializedJob(f"Serialized job must be a list of steps, got {type(steps).__name__}")
        return cls.from_list(app, steps)

    # Internals

    def _has_pending_fetch(self) -> bool:
        return any(isinstance(step, Fetch) for step in self._steps[self._next_step:])

    def _apply_step(self, step: Step) -> TempObject:
        match step:
            case Fetch():
                return TempObject(data=self._app.datastore.retrieve(step.uid))
            case Process():
                if self._temp_object is None:
                    raise NothingToProcess(
                        "Can't process because temp object has not been initialized. Need to fetch first?"
                    )
                return TempObject(
                    data=self._app.processors.process(self._temp_object.data, step.name, *step.arguments)
                )
            case Encode():
                if self._temp_object is None:
                    raise NothingToEncode(
                        "Can't encode because temp object has not been initialized. Need to fetch first?"
                    )
                return TempObject(
                    data=self._app.encoders.encode(self._temp_object.data, step.format, *step.arguments)
                )
            case _:
                assert_never(step)

    def __repr__(self) -> str:
        return (
            f"Job(job_id={self.job_id!r}, steps={self._steps!r}, "
            f"cursor={self._next_step})"
        )
