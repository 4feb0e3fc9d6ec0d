"""Listener registry — ordered callbacks per property name."""

from __future__ import annotations

from typing import Callable, Iterator


class ListenerEntry:
    """One registered callback, with the context it is called against."""

    __slots__ = ("callback", "context")

    def __init__(self, callback: Callable, context: object = None) -> None:
        self.callback = callback
        self.context = context

    def matches(self, listener: Callable) -> bool:
        return self.callback is listener or self.callback == listener

    def __call__(self, *args) -> None:
        # A context is bound like a method receives self.
        if self.context is None:
            self.callback(*args)
        else:
            self.callback(self.context, *args)

    def __repr__(self) -> str:
        return f"ListenerEntry({self.callback!r}, context={self.context!r})"


class ListenerRegistry:
    """Per-property lists of listeners, kept in registration order."""

    def __init__(self) -> None:
        self._entries: dict[str, list[ListenerEntry]] = {}

    def add(self, name: str, listener: Callable, context: object = None) -> None:
        self._entries.setdefault(name, []).append(ListenerEntry(listener, context))

    def remove(self, name: str, listener: Callable) -> bool:
        """Remove listener from name only. Returns True if anything was removed."""
        entries = self._entries.get(name)
        if not entries:
            return False
        kept = [entry for entry in entries if not entry.matches(listener)]
        removed = len(kept) != len(entries)
        # Replace rather than mutate: a fan-out in progress iterates a snapshot.
        self._entries[name] = kept
        return removed

    def remove_everywhere(self, listener: Callable) -> int:
        """Remove listener from every property. Returns the number of entries removed."""
        removed = 0
        for name in list(self._entries):
            before = len(self._entries[name])
            self.remove(name, listener)
            removed += before - len(self._entries[name])
        return removed

    def listeners(self, name: str) -> list[ListenerEntry]:
        """Snapshot of the entries for name, in registration order."""
        return list(self._entries.get(name, ()))

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())
