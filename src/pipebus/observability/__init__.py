"""Bus observability — structured events for everything a pipe does.

Pipes created by a registry with ``BusConfig(observe=True)`` record:
- **Delivery**: live dispatch, retained backups, retroactive recovery
- **Subscriptions**: subscribe and every unsubscribe shape
- **Teardown**: pipes being trashed

All events are frozen dataclasses with nanosecond timestamps, safe to
share across threads.

Quick Start:
    >>> from pipebus import BusConfig, PipeRegistry
    >>> registry = PipeRegistry(BusConfig(observe=True))
    >>> registry.get_pipe("jobs").send("done", 42)
    0
    >>> registry.collector.log.recent(1)[0].address
    'done'

"""

from pipebus.observability.collector import BusCollector
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

__all__ = [
    "BackupRecovered",
    "BusCollector",
    "BusEvent",
    "ContentDelivered",
    "ContentRetained",
    "EventLog",
    "PipeTrashed",
    "Subscribed",
    "Unsubscribed",
    "now_ns",
]
