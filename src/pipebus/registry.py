"""Pipe registry — one Pipe per name, created on first use.

``PipeRegistry`` is a plain object: build one at your composition root and
pass it to the code that needs pipes.  For code that wants process-wide
pipes without wiring, the module-level ``get_pipe`` uses a lazily created
default registry.

Pipe names are compared exactly (case-sensitively), unlike addresses inside
a pipe.

Thread Safety:
    Create-if-absent is atomic under a ``threading.Lock``: concurrent first
    requests for one name all receive the same instance.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from pipebus.config import BusConfig
from pipebus.observability.collector import BusCollector
from pipebus.observability.log import EventLog
from pipebus.pipe import _FACTORY_TOKEN, Pipe

if TYPE_CHECKING:
    from pipebus._types import PipeName


class PipeRegistry:
    """Name -> Pipe factory.

    The same name always returns the identical Pipe for the lifetime of the
    registry.  Entries are never removed; ``trash_all`` empties pipes but
    keeps them registered.

    Args:
        config: Bus configuration.  Defaults to ``BusConfig()``.
        collector: Collector handed to every pipe.  When omitted and
            ``config.observe`` is set, the registry creates one.

    """

    __slots__ = ("_collector", "_config", "_lock", "_pipes")

    def __init__(
        self,
        config: BusConfig | None = None,
        *,
        collector: BusCollector | None = None,
    ) -> None:
        self._config = config if config is not None else BusConfig()
        if collector is None and self._config.observe:
            collector = BusCollector(EventLog(max_events=self._config.max_events))
        self._collector = collector
        self._pipes: dict[str, Pipe] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> BusConfig:
        return self._config

    @property
    def collector(self) -> BusCollector | None:
        """Collector shared by this registry's pipes, if observing."""
        return self._collector

    @property
    def default_name(self) -> str:
        """Reserved name of the public pipe."""
        return self._config.default_pipe

    def get_pipe(self, name: PipeName | None = None) -> Pipe:
        """Return the pipe called ``name``, creating it if needed.

        ``None`` selects the public pipe.
        """
        key = self._config.default_pipe if name is None else str(name)
        with self._lock:
            pipe = self._pipes.get(key)
            if pipe is None:
                pipe = Pipe(key, _token=_FACTORY_TOKEN, collector=self._collector)
                self._pipes[key] = pipe
            return pipe

    def names(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._pipes)

    def trash_all(self) -> None:
        """Trash every pipe.  They stay registered and reusable."""
        with self._lock:
            pipes = list(self._pipes.values())
        for pipe in pipes:
            pipe.trash()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return str(name) in self._pipes

    def __len__(self) -> int:
        with self._lock:
            return len(self._pipes)


# ---------------------------------------------------------------------------
# Process-wide default registry
# ---------------------------------------------------------------------------

_default_registry: PipeRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> PipeRegistry:
    """The registry behind module-level ``get_pipe``, created on first use."""
    global _default_registry  # noqa: PLW0603
    with _default_lock:
        if _default_registry is None:
            _default_registry = PipeRegistry()
        return _default_registry


def get_pipe(name: PipeName | None = None) -> Pipe:
    """Return the process-wide pipe called ``name`` (the public pipe if None)."""
    return default_registry().get_pipe(name)
