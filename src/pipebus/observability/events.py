"""Bus event model.

Every state change a pipe makes can be recorded as a frozen dataclass with:
- ``pipe``: Name of the pipe that produced the event
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Delivery events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ContentDelivered:
    """Content was dispatched live to the subscribers of an address.

    Attributes:
        pipe: Pipe name.
        address: Address the content was sent to.
        handlers: Number of handlers invoked.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    pipe: str
    address: str
    handlers: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ContentRetained:
    """Content was sent to an address without subscribers and kept as backup.

    Attributes:
        pipe: Pipe name.
        address: Address the content was sent to.
        replaced: True if an earlier backup was overwritten.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    pipe: str
    address: str
    replaced: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BackupRecovered:
    """A backup was handed to a retroactive subscriber and removed."""

    pipe: str
    address: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Subscription events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Subscribed:
    """A handler was subscribed to an address."""

    pipe: str
    address: str
    retroactive: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class Unsubscribed:
    """An unsubscribe call was made.

    Attributes:
        pipe: Pipe name.
        address: Address, or None when every address was targeted.
        handler_given: True if a specific handler was removed.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    pipe: str
    address: str | None
    handler_given: bool
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PipeTrashed:
    """A pipe dropped all of its backups and subscriptions."""

    pipe: str
    backups_cleared: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type BusEvent = (
    ContentDelivered
    | ContentRetained
    | BackupRecovered
    | Subscribed
    | Unsubscribed
    | PipeTrashed
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
