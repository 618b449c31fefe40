"""pipebus — a synchronous, in-process publish/subscribe bus.

Producers send content to an address on a named pipe; consumers subscribe
to the address.  Neither side knows about the other.  Content sent while
nobody listens is kept as the address's backup until someone recovers it.

Quick start::

    from pipebus import get_pipe

    pipe = get_pipe("jobs")
    pipe.send("finished", 42)            # nobody listening: kept as backup
    pipe.retroactively_subscribe("finished", print)   # prints 42
    pipe.send("finished", 43)            # prints 43

For explicit wiring, create a registry and pass it around::

    from pipebus import BusConfig, PipeRegistry

    registry = PipeRegistry(BusConfig(observe=True))
    pipe = registry.get_pipe()           # the public pipe

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "BusConfig",
    "ChangeRegistry",
    "ConfigError",
    "InvalidArgument",
    "Pipe",
    "PipeRegistry",
    "PipebusError",
    "__version__",
    "get_pipe",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pipebus`` fast while providing a clean top-level API.
    """
    if name == "BusConfig":
        from pipebus.config import BusConfig

        return BusConfig

    if name == "load_config":
        from pipebus.config_loader import load_config

        return load_config

    if name == "ChangeRegistry":
        from pipebus.changes import ChangeRegistry

        return ChangeRegistry

    if name == "Pipe":
        from pipebus.pipe import Pipe

        return Pipe

    if name == "PipeRegistry":
        from pipebus.registry import PipeRegistry

        return PipeRegistry

    if name == "get_pipe":
        from pipebus.registry import get_pipe

        return get_pipe

    if name in ("PipebusError", "InvalidArgument", "ConfigError"):
        import pipebus._errors

        return getattr(pipebus._errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
