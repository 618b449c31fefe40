"""Change registry — ordered, duplicate-free callback lists per change type.

Maps a change type to the callbacks interested in it and invokes them
synchronously on ``dispatch``.  Change types are compared
case-insensitively: ``"Saved"`` and ``"saved"`` are the same key.

Thread Safety:
    The callback map is protected by a ``threading.Lock``.  Callbacks are
    always invoked outside the lock, so a callback may register, unregister
    or dispatch on the same registry without deadlocking.

"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from pipebus._errors import InvalidArgument

if TYPE_CHECKING:
    from pipebus._types import Callback, ChangeType


def normalize(change_type: object) -> str:
    """Return the lookup key for a change type."""
    return str(change_type).casefold()


def _index_of(callbacks: list[Callback], callback: Callback) -> int:
    # Identity, not equality: two equal bound methods are still distinct entries
    for i, existing in enumerate(callbacks):
        if existing is callback:
            return i
    return -1


class ChangeRegistry:
    """Registry of change type -> ordered callback list.

    A callback is stored at most once per change type.  Registering it again
    is a no-op and keeps its original position.

    """

    __slots__ = ("_callbacks", "_lock")

    def __init__(self) -> None:
        self._callbacks: dict[str, list[Callback]] = {}
        self._lock = threading.Lock()

    def register(self, change_type: ChangeType, callback: Callback) -> None:
        """Append ``callback`` to the list for ``change_type``.

        Raises:
            InvalidArgument: ``change_type`` is None or ``callback`` is not
                callable.

        """
        if change_type is None:
            msg = "register() requires a change type"
            raise InvalidArgument(msg)
        if not callable(callback):
            msg = f"register() requires a callable, got {callback!r}"
            raise InvalidArgument(msg)

        key = normalize(change_type)
        with self._lock:
            callbacks = self._callbacks.setdefault(key, [])
            if _index_of(callbacks, callback) < 0:
                callbacks.append(callback)

    def is_registered(self, change_type: ChangeType) -> bool:
        """True if at least one callback listens to ``change_type``."""
        with self._lock:
            return bool(self._callbacks.get(normalize(change_type)))

    def unregister(
        self,
        change_type: ChangeType | None = None,
        callback: Callback | None = None,
    ) -> None:
        """Remove callbacks.  The arguments given select what goes:

        - ``change_type`` only: every callback of that change type.
        - ``change_type`` and ``callback``: that callback, for that type only.
        - ``callback`` only: that callback, from every change type.
        - neither: everything.  Meant for teardown.

        Unknown change types and callbacks are ignored.
        """
        with self._lock:
            if change_type is None and callback is None:
                self._callbacks.clear()
                return

            if callback is None:
                self._callbacks.pop(normalize(change_type), None)
                return

            if change_type is None:
                keys = list(self._callbacks)
            else:
                keys = [normalize(change_type)]

            for key in keys:
                callbacks = self._callbacks.get(key)
                if not callbacks:
                    continue
                i = _index_of(callbacks, callback)
                if i >= 0:
                    del callbacks[i]
                if not callbacks:
                    del self._callbacks[key]

    def clear(self) -> None:
        """Drop every registration."""
        self.unregister()

    def dispatch(self, change_type: ChangeType, *args: Any) -> int:
        """Invoke every callback of ``change_type`` with ``*args``.

        Callbacks run in registration order over a snapshot taken before the
        first call, so changes made from inside a callback only apply to
        later dispatches.  Exceptions from callbacks propagate.

        Returns:
            Number of callbacks invoked; 0 when nothing is registered.

        """
        with self._lock:
            snapshot = tuple(self._callbacks.get(normalize(change_type), ()))

        for callback in snapshot:
            callback(*args)
        return len(snapshot)

    # ----- Introspection -----

    def callbacks(self, change_type: ChangeType) -> tuple[Callback, ...]:
        """Snapshot of the callbacks registered for ``change_type``."""
        with self._lock:
            return tuple(self._callbacks.get(normalize(change_type), ()))

    def change_types(self) -> frozenset[str]:
        """Normalized change types that have at least one callback."""
        with self._lock:
            return frozenset(k for k, v in self._callbacks.items() if v)

    def __contains__(self, change_type: object) -> bool:
        return self.is_registered(change_type)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for v in self._callbacks.values() if v)
