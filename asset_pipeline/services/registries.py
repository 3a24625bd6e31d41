"""Named registries of processors, encoders and analysers."""

from typing import Any, Callable

from structlog import get_logger

logger = get_logger(__name__)


class RegistryError(Exception):
    """Base exception for registry errors."""

    pass


class UnknownProcessor(RegistryError):
    """Raised when no processor is registered under the requested name."""

    pass


class UnknownEncoder(RegistryError):
    """Raised when no encoder is registered for the requested format."""

    pass


class UnknownAnalyser(RegistryError):
    """Raised when no analyser is registered under the requested name."""

    pass


class Registry:
    """Mapping of names to callables that receive the payload bytes first.

    Subclasses set ``kind`` for log messages and ``not_found_error`` for
    lookups of unregistered names.
    """

    kind = "callable"
    not_found_error: type[RegistryError] = RegistryError

    def __init__(self):
        self._callables: dict[str, Callable[..., Any]] = {}

    def register(self, name: str, fn: Callable[..., Any] | None = None):
        """Register a callable under a name.

        Can be called directly, ``registry.register("resize", resize)``, or used
        as a decorator, ``@registry.register("resize")``.

        Args:
            name: Name the callable is looked up by
            fn: The callable; omitted when used as a decorator

        Returns:
            The registered callable, or a decorator when fn is omitted
        """
        if fn is None:
            def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                return self.register(name, func)
            return decorator

        if name in self._callables:
            logger.warning("Replacing registered callable", kind=self.kind, name=name)
        self._callables[name] = fn
        return fn

    def get(self, name: str) -> Callable[..., Any]:
        try:
            return self._callables[name]
        except KeyError:
            raise self.not_found_error(
                f"No {self.kind} registered as {name!r} (known: {', '.join(self.names()) or 'none'})"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._callables)

    def __contains__(self, name: object) -> bool:
        return name in self._callables

    def __len__(self) -> int:
        return len(self._callables)

    def _call(self, name: str, data: bytes, *args: Any) -> Any:
        fn = self.get(name)
        logger.debug("Calling registered callable", kind=self.kind, name=name, size=len(data))
        return fn(data, *args)


class ProcessorRegistry(Registry):
    """Processors turn payload bytes into new payload bytes."""

    kind = "processor"
    not_found_error = UnknownProcessor

    def process(self, data: bytes, name: str, *params: Any) -> bytes:
        return self._call(name, data, *params)


class EncoderRegistry(Registry):
    """Encoders convert payload bytes to a named format."""

    kind = "encoder"
    not_found_error = UnknownEncoder

    def encode(self, data: bytes, format: str, *params: Any) -> bytes:
        return self._call(format, data, *params)


class AnalyserRegistry(Registry):
    """Analysers inspect payload bytes and return any value."""

    kind = "analyser"
    not_found_error = UnknownAnalyser

    def analyse(self, data: bytes, name: str, *args: Any) -> Any:
        return self._call(name, data, *args)
