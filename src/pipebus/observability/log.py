"""Event log — queryable, thread-safe store of bus events.

Stores a bounded ring buffer of ``BusEvent`` objects for inspection.
Supports querying by event type, time range, pipe and address.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Safe for
    concurrent reads and writes from multiple threads.

"""

import threading
from collections import deque
from collections.abc import Sequence
from typing import Any

from pipebus.observability.events import BusEvent


class EventLog:
    """Bounded event store with query support.

    Events are stored in a ring buffer (deque with maxlen).  When the
    buffer is full, the oldest events are discarded automatically.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[BusEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    @property
    def max_events(self) -> int:
        return self._max_events

    def append(self, event: BusEvent) -> None:
        """Record an event in the log."""
        with self._lock:
            self._events.append(event)

    def append_many(self, events: Sequence[BusEvent]) -> None:
        """Record multiple events at once."""
        with self._lock:
            self._events.extend(events)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        pipe: str | None = None,
        address: str | None = None,
        limit: int = 100,
    ) -> list[BusEvent]:
        """Query bus events with optional filters.

        Args:
            event_type: Only return events of this type, e.g.
                ``ContentRetained`` to list sends nobody heard.
            since_ns: Only return events after this timestamp (nanoseconds).
            pipe: Only return events produced by this pipe (exact match,
                like pipe names in the registry).
            address: Only return events for this address.  Compared
                exactly as recorded; ``PipeTrashed`` carries no address and
                never matches, and ``Unsubscribed`` for every address holds
                None.
            limit: Maximum number of events to return.

        Returns:
            List of matching events, most recent first.

        """
        with self._lock:
            results: list[BusEvent] = []
            for event in reversed(self._events):
                if len(results) >= limit:
                    break

                if event_type is not None and not isinstance(event, event_type):
                    continue

                if since_ns and event.timestamp_ns < since_ns:
                    continue

                if pipe is not None and event.pipe != pipe:
                    continue

                if address is not None and getattr(event, "address", None) != address:
                    continue

                results.append(event)

            return results

    def recent(self, n: int = 20) -> list[BusEvent]:
        """Return the N most recent bus events, oldest first.

        Handy for tailing what a registry's pipes just did, e.g. the
        delivery or retention a ``send`` produced.  ``n <= 0`` returns an
        empty list.
        """
        if n <= 0:
            return []
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return summary statistics about stored events."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        pipe_counts: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1
            pipe_counts[event.pipe] = pipe_counts.get(event.pipe, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": type_counts,
            "by_pipe": pipe_counts,
        }
