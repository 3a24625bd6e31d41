"""Step records that make up a job's recipe.

Steps are plain immutable data. They never hold a temp object; the job
that owns them decides how each kind is applied.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class BaseStep(BaseModel):
    """Common shape of all steps: an argument tuple whose head identifies the operation."""

    tag: ClassVar[str]

    args: tuple[Any, ...]

    model_config = ConfigDict(frozen=True)

    def __init__(self, *args: Any):
        super().__init__(args=args)

    def to_list(self) -> list[Any]:
        """Return the step as ``[tag, *args]``."""
        return [self.tag, *self.args]

    def __repr__(self) -> str:
        params = ", ".join(repr(arg) for arg in self.args)
        return f"{self.__class__.__name__}({params})"


class Fetch(BaseStep):
    """Retrieve a stored payload by uid."""

    tag: ClassVar[str] = "f"

    @property
    def uid(self) -> Any:
        return self.args[0]


class Process(BaseStep):
    """Run a named processor against the current temp object."""

    tag: ClassVar[str] = "p"

    @property
    def name(self) -> str:
        return self.args[0]

    @property
    def arguments(self) -> tuple[Any, ...]:
        return self.args[1:]


class Encode(BaseStep):
    """Encode the current temp object to a named format."""

    tag: ClassVar[str] = "e"

    @property
    def format(self) -> str:
        return self.args[0]

    @property
    def arguments(self) -> tuple[Any, ...]:
        return self.args[1:]


Step = Fetch | Process | Encode

STEP_TYPES: dict[str, type[BaseStep]] = {
    step_type.tag: step_type for step_type in (Fetch, Process, Encode)
}
