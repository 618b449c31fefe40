"""Tests for pipebus package exports and metadata."""

import pytest

import pipebus


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(pipebus.__version__, str)
        assert pipebus.__version__ == "0.1.0"

    def test_free_threading_declaration(self) -> None:
        assert pipebus._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in pipebus.__all__:
            getattr(pipebus, name)

    def test_top_level_get_pipe_is_process_wide(self) -> None:
        from pipebus.registry import get_pipe

        assert pipebus.get_pipe("package-test") is get_pipe("package-test")

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            pipebus.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
