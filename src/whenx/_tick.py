"""Next-tick deferral — where debounced flushes wait for the stack to unwind.

A deferred callback goes to the first backend available:

1. a deferrer installed with set_deferrer() (e.g. a GUI app's call_later),
2. the running asyncio event loop (loop.call_soon),
3. the module tick queue, drained by flush().

The tick queue is for hosts without an event loop, and for tests. Callbacks
left in it when a loop or deferrer becomes available are handed off to it.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable

logger = logging.getLogger("whenx.tick")

Deferrer = Callable[[Callable[[], None]], object]

_deferrer: Deferrer | None = None

# Callbacks deferred while no deferrer or event loop was available, awaiting flush().
_queue: deque[Callable[[], None]] = deque()

# The deferrer or loop a drain of _queue was last handed to, until it runs.
_drain_target: Deferrer | None = None


def set_deferrer(deferrer: Deferrer | None) -> None:
    """Install the process-wide next-tick deferrer, or None to restore the default.

    Call once from the host:
        whenx.set_deferrer(app.call_later)

    The deferrer receives a zero-argument callable and must run it later on
    the same thread, after the current call stack unwinds.
    """
    global _deferrer
    _deferrer = deferrer


def _target() -> Deferrer | None:
    """Where a deferred callback goes now, or None for the tick queue."""
    if _deferrer is not None:
        return _deferrer
    try:
        return asyncio.get_running_loop().call_soon
    except RuntimeError:
        return None


def _drain() -> None:
    global _drain_target
    _drain_target = None
    flush()


def hand_off() -> None:
    """Move callbacks stranded in the tick queue onto the current deferrer or loop.

    Callbacks queued before an event loop started (or before a deferrer was
    installed) would otherwise wait for a flush() that nobody calls.
    """
    global _drain_target
    if not _queue:
        return
    target = _target()
    if target is None or target == _drain_target:
        return
    _drain_target = target
    logger.debug("Handing off %d queued callbacks", len(_queue))
    target(_drain)


def defer(callback: Callable[[], None]) -> None:
    """Run callback on a later tick."""
    target = _target()
    if target is None:
        _queue.append(callback)
        return
    # Earlier callbacks run first.
    hand_off()
    target(callback)


def flush() -> int:
    """Run every queued callback, including ones queued while flushing.

    Returns the number of callbacks run. An exception from a callback
    propagates; callbacks behind it stay queued for the next flush().
    """
    ran = 0
    while _queue:
        callback = _queue.popleft()
        ran += 1
        callback()
    if ran:
        logger.debug("Flushed %d deferred callbacks", ran)
    return ran


def get_pending_count() -> int:
    """Number of callbacks waiting in the tick queue. Useful for testing."""
    return len(_queue)
