"""pipebus configuration.

BusConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass

from pipebus._errors import ConfigError

DEFAULT_PIPE = "__public__"


@dataclass(frozen=True, slots=True)
class BusConfig:
    """Configuration for a PipeRegistry.

    Attributes:
        default_pipe: Reserved name of the public pipe, used by
            ``get_pipe()`` when no name is given.
        observe: Record bus events into a ``BusCollector`` owned by the
            registry.
        max_events: Ring-buffer size of the event log when ``observe`` is on.

    """

    default_pipe: str = DEFAULT_PIPE
    observe: bool = False
    max_events: int = 10_000

    def __post_init__(self) -> None:
        if not isinstance(self.default_pipe, str) or not self.default_pipe:
            msg = f"default_pipe must be a non-empty string, got {self.default_pipe!r}"
            raise ConfigError(msg)
        if not isinstance(self.max_events, int) or self.max_events < 1:
            msg = f"max_events must be a positive integer, got {self.max_events!r}"
            raise ConfigError(msg)
