"""Shared test fixtures for pipebus."""

from __future__ import annotations

from typing import Any

import pytest

from pipebus.config import BusConfig
from pipebus.pipe import Pipe
from pipebus.registry import PipeRegistry


class Recorder:
    """Callable that remembers every call it receives."""

    def __init__(self, name: str = "recorder", log: list[tuple[str, Any]] | None = None) -> None:
        self.name = name
        self.calls: list[tuple[Any, ...]] = []
        self._log = log

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)
        if self._log is not None:
            self._log.append((self.name, args[0] if len(args) == 1 else args))

    @property
    def values(self) -> list[Any]:
        """First positional argument of every call."""
        return [args[0] for args in self.calls]


@pytest.fixture
def registry() -> PipeRegistry:
    """A fresh, isolated registry."""
    return PipeRegistry()


@pytest.fixture
def observed_registry() -> PipeRegistry:
    """A registry that records bus events."""
    return PipeRegistry(BusConfig(observe=True, max_events=100))


@pytest.fixture
def pipe(registry: PipeRegistry) -> Pipe:
    return registry.get_pipe("test")
