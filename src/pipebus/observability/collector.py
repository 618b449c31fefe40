"""Bus collector — the recording front end pipes write their events through.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from multiple threads.

"""

from __future__ import annotations

from pipebus.observability.events import (
    BackupRecovered,
    BusEvent,
    ContentDelivered,
    ContentRetained,
    PipeTrashed,
    Subscribed,
    Unsubscribed,
    now_ns,
)
from pipebus.observability.log import EventLog


class BusCollector:
    """Records bus events into an ``EventLog``.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record(self, event: BusEvent) -> None:
        """Record a prebuilt event."""
        self._log.append(event)

    # ----- Delivery -----

    def record_delivered(self, pipe: str, address: str, *, handlers: int) -> None:
        """Record a live dispatch."""
        self._log.append(
            ContentDelivered(
                pipe=pipe,
                address=address,
                handlers=handlers,
                timestamp_ns=now_ns(),
            )
        )

    def record_retained(self, pipe: str, address: str, *, replaced: bool = False) -> None:
        """Record content stored as a backup."""
        self._log.append(
            ContentRetained(
                pipe=pipe,
                address=address,
                replaced=replaced,
                timestamp_ns=now_ns(),
            )
        )

    def record_recovered(self, pipe: str, address: str) -> None:
        """Record a backup handed to a retroactive subscriber."""
        self._log.append(BackupRecovered(pipe=pipe, address=address, timestamp_ns=now_ns()))

    # ----- Subscriptions -----

    def record_subscribed(self, pipe: str, address: str, *, retroactive: bool = False) -> None:
        """Record a subscription."""
        self._log.append(
            Subscribed(
                pipe=pipe,
                address=address,
                retroactive=retroactive,
                timestamp_ns=now_ns(),
            )
        )

    def record_unsubscribed(
        self,
        pipe: str,
        address: str | None,
        *,
        handler_given: bool = False,
    ) -> None:
        """Record an unsubscribe call, whatever its shape."""
        self._log.append(
            Unsubscribed(
                pipe=pipe,
                address=address,
                handler_given=handler_given,
                timestamp_ns=now_ns(),
            )
        )

    def record_trashed(self, pipe: str, *, backups_cleared: int = 0) -> None:
        """Record a pipe being trashed."""
        self._log.append(
            PipeTrashed(pipe=pipe, backups_cleared=backups_cleared, timestamp_ns=now_ns())
        )
