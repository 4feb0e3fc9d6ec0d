"""when() — a debounced callback over several properties.

The callback runs:
- with property values as positional arguments, in the order named,
- only if every named property is defined (OPTIONAL counts as defined),
- once, synchronously, at registration,
- on a later tick after one or more of the properties change,
- only once per burst of synchronous changes, seeing the latest values.

The Trigger returned by when() is registered as a plain listener on every
named property. Cancelling it by identity removes it everywhere.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from whenx.markers import is_defined
from whenx.registry import ListenerRegistry
from whenx.scheduler import Scheduler
from whenx.store import PropertyStore

logger = logging.getLogger("whenx.when")


class Trigger:
    """Listener that requests a debounced re-read of its properties.

    Calling a Trigger (with any arguments, since it is a listener) only
    queues a flush on its own Scheduler; the flush reads current values.
    """

    __slots__ = ("_store", "_properties", "_callback", "_context", "_scheduler", "_cancelled")

    def __init__(
        self,
        store: PropertyStore,
        properties: Sequence[str],
        callback: Callable,
        context: object = None,
    ) -> None:
        self._store = store
        self._properties = tuple(properties)
        self._callback = callback
        self._context = context
        self._scheduler = Scheduler(self._fire)
        self._cancelled = False

    @property
    def properties(self) -> tuple[str, ...]:
        return self._properties

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def pending(self) -> bool:
        return self._scheduler.pending

    def __call__(self, *_args) -> None:
        if not self._cancelled:
            self._scheduler.request()

    def _fire(self) -> None:
        """Read current values; call back if all are defined."""
        if self._cancelled:
            return
        values = [self._store.read(name) for name in self._properties]
        if not all(is_defined(value) for value in values):
            return
        if self._context is None:
            self._callback(*values)
        else:
            self._callback(self._context, *values)

    def cancel(self) -> None:
        """Stop firing, including a flush that is already queued.

        Does not unregister the trigger; Model.cancel() does both.
        """
        self._cancelled = True

    def __repr__(self) -> str:
        name = getattr(self._callback, "__name__", repr(self._callback))
        state = "cancelled" if self._cancelled else "active"
        return f"Trigger({list(self._properties)!r}, {name}, {state})"


def when(
    store: PropertyStore,
    registry: ListenerRegistry,
    properties: str | Sequence[str],
    callback: Callable,
    context: object = None,
) -> Trigger:
    """Register callback over properties on store. Returns the Trigger handle.

    Usage:
        trigger = when(store, registry, ["width", "height"], resize)
        store.write("width", 100)   # nothing yet
        store.write("height", 50)   # still nothing
        # next tick: resize(100, 50), once
    """
    properties = (properties,) if isinstance(properties, str) else tuple(properties)
    names = list(dict.fromkeys(properties))
    for name in names:
        store.track(name)

    trigger = Trigger(store, properties, callback, context)
    for name in names:
        registry.add(name, trigger)
    logger.debug("Registered %r", trigger)

    # Once for initialization, without waiting for a tick.
    try:
        trigger._fire()
    except Exception:
        # No handle reaches the caller, so nothing could cancel the trigger later.
        registry.remove_everywhere(trigger)
        trigger.cancel()
        raise
    return trigger
