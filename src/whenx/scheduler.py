"""Scheduler — collapses a burst of requests into one deferred run.

Each when() combinator owns one Scheduler, so unrelated combinators never
share debounce state.
"""

from __future__ import annotations

from typing import Callable

from whenx._tick import defer, hand_off


class Scheduler:
    """Debounces request() calls within one tick into a single callback run."""

    __slots__ = ("_callback", "_pending")

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._pending = False

    @property
    def pending(self) -> bool:
        """True while a run is queued and has not started."""
        return self._pending

    def request(self) -> None:
        """Queue one run unless one is already queued."""
        if not self._pending:
            self._pending = True
            defer(self._run)
        else:
            # The queued run may be stranded in the tick queue from before a loop started.
            hand_off()

    def _run(self) -> None:
        # Cleared first so the callback, or anything after it, can queue the next burst.
        self._pending = False
        self._callback()

    def __repr__(self) -> str:
        state = "pending" if self._pending else "idle"
        return f"Scheduler({getattr(self._callback, '__name__', self._callback)!r}, {state})"
