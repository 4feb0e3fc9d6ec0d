"""Model — the object consumers hold: properties, listeners and when().

A Model owns one PropertyStore and one ListenerRegistry. Properties are
created on first reference, unless the model is strict, in which case only
the names it was constructed with exist.

Values change only through set(); mutating a value read with get() in place
notifies nobody.

Thread safety: call set_marshal() once from the owning thread. After that,
any set() from another thread is handed to the marshal function. Owning-thread
set() stays synchronous.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Mapping, Sequence

from whenx.exceptions import UnknownListenerError
from whenx.markers import UNSET
from whenx.registry import ListenerRegistry
from whenx.store import PropertyStore
from whenx.when import Trigger, when as _when

logger = logging.getLogger("whenx.model")

_MISSING = object()

# ─── Auto-marshal ────────────────────────────────────────────────────────────
_marshal = None
_marshal_thread = None


def set_marshal(marshal: Callable[[Callable[[], None]], object] | None) -> None:
    """Set the global marshal for cross-thread Model.set() calls.

    Call once from the owning (main/UI) thread:
        whenx.set_marshal(app.call_from_thread)

    After this, set() from any other thread is passed to marshal as a
    zero-argument callable. Pass None to write in place from every thread.
    """
    global _marshal, _marshal_thread
    _marshal = marshal
    _marshal_thread = threading.current_thread() if marshal is not None else None


class Model:
    """Named, observable properties with batched multi-property callbacks."""

    def __init__(
        self,
        defaults: Mapping[str, object] | None = None,
        /,
        *,
        strict: bool = False,
        **kwargs: object,
    ) -> None:
        initial = dict(defaults or {})
        initial.update(kwargs)
        self._registry = ListenerRegistry()
        self._store = PropertyStore(self._registry, strict=strict, known=initial)
        self._triggers: list[Trigger] = []
        self._store.set_many(initial)

    @property
    def strict(self) -> bool:
        return self._store.strict

    def get(self, name: str, default: object = None) -> object:
        """Current value of name, or default if it was never set."""
        value = self._store.read(name)
        return default if value is UNSET else value

    def set(
        self,
        values: Mapping[str, object] | str | None = None,
        value: object = _MISSING,
        /,
        **kwargs: object,
    ) -> None:
        """Write properties, in order, notifying listeners of each.

        Usage:
            model.set({"x": 1, "y": 2})
            model.set(x=1, y=2)
            model.set("margin", {"top": 20})
        """
        if isinstance(values, str):
            if value is _MISSING:
                raise TypeError(f"set({values!r}) is missing a value")
            values = {values: value}
        updates = dict(values or {})
        updates.update(kwargs)

        if _marshal is not None and threading.current_thread() is not _marshal_thread:
            _marshal(lambda: self._store.set_many(updates))
        else:
            self._store.set_many(updates)

    def on(self, name: str, listener: Callable, context: object = None) -> None:
        """Call listener(new, old) synchronously on every write to name."""
        self._store.track(name)
        self._registry.add(name, listener, context)

    def off(self, name: str, listener: Callable) -> None:
        """Remove a listener added with on()."""
        self._store.track(name)
        if not self._registry.remove(name, listener) and self._store.strict:
            raise UnknownListenerError(listener, name)

    def when(
        self,
        properties: str | Sequence[str],
        callback: Callable,
        context: object = None,
    ) -> Trigger:
        """Call callback with the values of properties once they are all defined.

        Runs once now, then once on the next tick after any burst of changes.
        Returns a handle for cancel().

        Usage:
            model = Model(x=1)
            model.when(["x", "y"], lambda x, y: model.set(xy=x * y))
            model.set(y=4)
            # next tick: xy == 4
        """
        trigger = _when(self._store, self._registry, properties, callback, context)
        self._triggers.append(trigger)
        return trigger

    def cancel(self, listener: Callable) -> None:
        """Remove a when() handle (or any listener) from every property."""
        removed = self._registry.remove_everywhere(listener)
        if listener in self._triggers:
            listener.cancel()
            self._triggers.remove(listener)
            logger.debug("Cancelled %r", listener)
        elif not removed and self._store.strict:
            raise UnknownListenerError(listener)

    def dispose(self) -> None:
        """Cancel every when() and drop every listener. Values are kept."""
        for trigger in self._triggers:
            trigger.cancel()
        logger.debug(
            "Disposed model: %d triggers, %d listeners",
            len(self._triggers), len(self._registry),
        )
        self._triggers.clear()
        self._registry.clear()

    def names(self) -> list[str]:
        return self._store.names()

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __repr__(self) -> str:
        values = {name: self._store.read(name) for name in self._store}
        return f"Model({values!r})"
