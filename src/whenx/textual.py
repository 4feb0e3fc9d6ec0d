"""Textual integration for whenx. Opt-in — requires textual.

Textual apps run on asyncio, so when() flushes land on the app's event loop
without any setup. This module adds the widget-safety guard.

// [LAW:single-enforcer] Guard + NoMatches + thread-marshal enforced in _guard, not at callsites.
// [LAW:locality-or-seam] Textual coupling isolated in this module — core whenx stays agnostic.
// [LAW:no-shared-mutable-globals] _paused_apps has single owner (this module), explicit API
//   (pause/is_safe), documented invariant (id present ↔ inside pause context).
"""

import functools
import logging
import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

logger = logging.getLogger("whenx.textual")

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded callbacks during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, fn):
    _main = threading.get_ident()

    def _safe(*args):
        try:
            fn(*args)
        except NoMatches:
            logger.debug("Skipped %r: widget not mounted", fn)

    @functools.wraps(fn)
    def _guarded(*args):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, *args)
        else:
            _safe(*args)

    return _guarded


def when(app, model, properties, callback, context=None):
    """model.when() that safely bridges to Textual widgets.

    Skips the callback while the app is paused or not running, catches
    NoMatches from widget queries, and marshals cross-thread calls via
    call_from_thread. Returns the trigger handle for model.cancel().
    """
    return model.when(properties, _guard(app, callback), context)


def on(app, model, name, listener, context=None):
    """model.on() with the same guard as when().

    Returns the guarded listener; pass it to model.off() to remove it.
    """
    guarded = _guard(app, listener)
    model.on(name, guarded, context)
    return guarded
