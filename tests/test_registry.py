"""Tests for pipebus.registry — named pipe factory."""

from __future__ import annotations

import threading

from pipebus.config import BusConfig
from pipebus.pipe import Pipe
from pipebus.registry import PipeRegistry, default_registry, get_pipe

from .conftest import Recorder


class TestPipeRegistry:
    """get_pipe identity and bookkeeping."""

    def test_same_name_same_instance(self, registry: PipeRegistry) -> None:
        assert registry.get_pipe("a") is registry.get_pipe("a")

    def test_distinct_names_distinct_instances(self, registry: PipeRegistry) -> None:
        a = registry.get_pipe("a")
        b = registry.get_pipe("b")
        assert a is not b
        assert isinstance(a, Pipe)

    def test_names_are_case_sensitive(self, registry: PipeRegistry) -> None:
        assert registry.get_pipe("Main") is not registry.get_pipe("main")

    def test_default_pipe(self, registry: PipeRegistry) -> None:
        public = registry.get_pipe()
        assert public.name == "__public__"
        assert registry.default_name == "__public__"
        assert registry.get_pipe("__public__") is public

    def test_custom_default_pipe(self) -> None:
        registry = PipeRegistry(BusConfig(default_pipe="main"))
        assert registry.get_pipe() is registry.get_pipe("main")

    def test_names_stringified(self, registry: PipeRegistry) -> None:
        assert registry.get_pipe(7) is registry.get_pipe("7")  # type: ignore[arg-type]

    def test_names_contains_len(self, registry: PipeRegistry) -> None:
        assert len(registry) == 0
        registry.get_pipe("a")
        registry.get_pipe()

        assert len(registry) == 2
        assert "a" in registry
        assert "b" not in registry
        assert registry.names() == frozenset({"a", "__public__"})

    def test_pipes_are_isolated(self, registry: PipeRegistry) -> None:
        h = Recorder()
        registry.get_pipe("a").subscribe("x", h)
        registry.get_pipe("b").send("x", "v")

        assert h.calls == []
        assert registry.get_pipe("b").has_backup_for("x")
        assert not registry.get_pipe("a").has_backup_for("x")

    def test_registries_are_isolated(self) -> None:
        assert PipeRegistry().get_pipe("a") is not PipeRegistry().get_pipe("a")

    def test_trash_all_keeps_pipes(self, registry: PipeRegistry) -> None:
        a = registry.get_pipe("a")
        b = registry.get_pipe("b")
        a.send("x", 1)
        h = Recorder()
        b.subscribe("x", h)

        registry.trash_all()

        assert not a.has_backup_for("x")
        b.send("x", 2)
        assert h.calls == []
        assert registry.get_pipe("a") is a

    def test_concurrent_first_access(self, registry: PipeRegistry) -> None:
        """Racing first requests for a name all get the same pipe."""
        barrier = threading.Barrier(8)
        seen: list[Pipe] = []
        lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            pipe = registry.get_pipe("contended")
            with lock:
                seen.append(pipe)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 8
        assert all(p is seen[0] for p in seen)
        assert len(registry) == 1


class TestDefaultRegistry:
    """Module-level get_pipe backed by one process-wide registry."""

    def test_default_registry_is_stable(self) -> None:
        assert default_registry() is default_registry()

    def test_get_pipe_identity(self) -> None:
        assert get_pipe("registry-test") is get_pipe("registry-test")
        assert get_pipe("registry-test") is default_registry().get_pipe("registry-test")

    def test_get_pipe_default(self) -> None:
        assert get_pipe() is get_pipe(None)
        assert get_pipe().name == default_registry().default_name
