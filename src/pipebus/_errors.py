"""pipebus error hierarchy.

All pipebus-specific errors inherit from PipebusError for easy catching.
"""


class PipebusError(Exception):
    """Base error for all pipebus operations."""


class InvalidArgument(PipebusError, ValueError):
    """A precondition on a call was violated.

    Raised for a missing or non-callable handler, a missing change type on
    registration, and direct construction of a Pipe outside its registry.
    """


class ConfigError(PipebusError):
    """Invalid or unreadable configuration."""
