"""Pipe — a named channel with live delivery and a one-value backup per address.

Sending to an address that has subscribers calls them right away, in the
order they subscribed.  Sending to an address nobody listens to keeps the
content as that address's *backup*, replacing any earlier one, so a late
subscriber can still pick it up with ``recover_backup_for`` or
``retroactively_subscribe``.

Pipes are only created by ``PipeRegistry.get_pipe``; calling ``Pipe(...)``
directly raises ``InvalidArgument``.

Case policy:
    Subscriptions go through a ``ChangeRegistry`` and match addresses
    case-insensitively.  Backup slots are keyed by the address exactly as
    given, so ``"Status"`` and ``"status"`` share subscribers but not
    backups.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from pipebus._errors import InvalidArgument
from pipebus.changes import ChangeRegistry

if TYPE_CHECKING:
    from pipebus._types import Address, Callback, PipeName
    from pipebus.observability.collector import BusCollector

# Held by the registry; proves a construction request came from the factory
_FACTORY_TOKEN = object()

_MISSING = object()


class Pipe:
    """Named send/subscribe space with its own backup store.

    Args:
        name: The name the registry knows this pipe by.
        collector: Optional collector that receives a bus event for every
            state change.

    """

    __slots__ = ("_backups", "_changes", "_collector", "_lock", "_name")

    def __init__(
        self,
        name: PipeName,
        *,
        _token: object = None,
        collector: BusCollector | None = None,
    ) -> None:
        if _token is not _FACTORY_TOKEN:
            msg = "Pipes are created through PipeRegistry.get_pipe(), not Pipe()"
            raise InvalidArgument(msg)
        self._name = name
        self._changes = ChangeRegistry()
        self._backups: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._collector = collector

    @property
    def name(self) -> PipeName:
        return self._name

    def __repr__(self) -> str:
        return f"<Pipe {self._name!r}>"

    # ----- Delivery -----

    def send(self, address: Address, content: Any = None) -> int:
        """Deliver ``content`` to the subscribers of ``address``.

        With no subscribers, ``content`` becomes the backup for ``address``
        instead.  Live delivery never creates or changes a backup.

        Returns:
            Number of handlers called; 0 when the content was retained.

        """
        # One snapshot decides: a subscriber removed concurrently means retain
        handlers = self._changes.dispatch(address, content)
        if handlers:
            if self._collector is not None:
                self._collector.record_delivered(self._name, str(address), handlers=handlers)
            return handlers

        key = str(address)
        with self._lock:
            replaced = key in self._backups
            self._backups[key] = content
        if self._collector is not None:
            self._collector.record_retained(self._name, key, replaced=replaced)
        return 0

    # ----- Subscriptions -----

    def subscribe(self, address: Address, handler: Callback) -> None:
        """Call ``handler(content)`` for every later send to ``address``.

        Any backup already held for ``address`` is left alone.
        """
        self._add_handler(address, handler)
        if self._collector is not None:
            self._collector.record_subscribed(self._name, str(address))

    def retroactively_subscribe(self, address: Address, handler: Callback) -> None:
        """Subscribe, then hand over the current backup for ``address``, if any.

        The backup is removed before ``handler`` sees it, so it is delivered
        retroactively at most once.
        """
        self._add_handler(address, handler)
        key = str(address)
        with self._lock:
            value = self._backups.pop(key, _MISSING)

        if self._collector is not None:
            self._collector.record_subscribed(self._name, key, retroactive=True)
            if value is not _MISSING:
                self._collector.record_recovered(self._name, key)

        if value is not _MISSING:
            handler(value)

    def unsubscribe(
        self,
        address: Address | None = None,
        handler: Callback | None = None,
    ) -> None:
        """Remove subscriptions; see ``ChangeRegistry.unregister`` for the shapes."""
        self._changes.unregister(address, handler)
        if self._collector is not None:
            self._collector.record_unsubscribed(
                self._name,
                None if address is None else str(address),
                handler_given=handler is not None,
            )

    def has_subscribers(self, address: Address) -> bool:
        return self._changes.is_registered(address)

    def _add_handler(self, address: Address, handler: Callback) -> None:
        if not callable(handler):
            msg = f"A callable handler is required to subscribe to {address!r}"
            raise InvalidArgument(msg)
        self._changes.register(address, handler)

    # ----- Backups -----

    def has_backup_for(self, address: Address) -> bool:
        """True if a backup slot exists for ``address``, even one holding None."""
        with self._lock:
            return str(address) in self._backups

    def recover_backup_for(self, address: Address, default: Any = None) -> Any:
        """Return the backup for ``address`` (or ``default``) without removing it."""
        with self._lock:
            return self._backups.get(str(address), default)

    def delete_backup_for(self, address: Address) -> None:
        with self._lock:
            self._backups.pop(str(address), None)

    def backed_up_addresses(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._backups)

    # ----- Teardown -----

    def trash(self) -> None:
        """Drop every backup and every subscription.

        The pipe stays registered under its name and can be used again.
        """
        with self._lock:
            cleared = len(self._backups)
            self._backups.clear()
        self._changes.clear()
        if self._collector is not None:
            self._collector.record_trashed(self._name, backups_cleared=cleared)
