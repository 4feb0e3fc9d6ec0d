"""Tests for whenx.textual — Textual integration layer."""

import threading

import pytest
from textual.css.query import NoMatches

from whenx import Model, flush
from whenx import textual as wtx


class _MockApp:
    """Minimal mock matching the Textual App interface wtx needs."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running
        self._call_from_thread_log = []

    def call_from_thread(self, fn, *args):
        self._call_from_thread_log.append((fn, args))
        fn(*args)


class TestWhen:
    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        m = Model(a=1)
        effects = []
        wtx.when(app, m, "a", effects.append)
        m.set(a=2)
        flush()
        assert effects == []

    def test_skips_during_pause(self):
        app = _MockApp()
        m = Model(a=1)
        effects = []
        wtx.when(app, m, "a", effects.append)
        assert effects == [1]
        m.set(a=2)
        with wtx.pause(app):
            flush()
        assert effects == [1]

    def test_fires_when_safe(self):
        app = _MockApp()
        m = Model()
        effects = []
        wtx.when(app, m, ["a", "b"], lambda a, b: effects.append(a + b))
        m.set(a=1, b=2)
        flush()
        assert effects == [3]

    def test_catches_nomatch(self):
        """NoMatches from widget queries are silently swallowed."""
        app = _MockApp()
        m = Model(a=1)

        def _raise_nomatch(v):
            raise NoMatches("StatusFooter")

        # Should not raise
        handle = wtx.when(app, m, "a", _raise_nomatch)
        m.set(a=2)
        flush()
        m.cancel(handle)

    def test_propagates_real_errors(self):
        """Non-NoMatches exceptions propagate normally."""
        app = _MockApp()
        m = Model()

        def _raise_value_error(v):
            raise ValueError("boom")

        wtx.when(app, m, "a", _raise_value_error)
        m.set(a=1)
        with pytest.raises(ValueError, match="boom"):
            flush()

    def test_cancel_stops(self):
        app = _MockApp()
        m = Model(a=1)
        effects = []
        handle = wtx.when(app, m, "a", effects.append)
        m.cancel(handle)
        m.set(a=2)
        flush()
        assert effects == [1]


class TestOn:
    def test_thread_marshal(self):
        """Writes from a background thread use call_from_thread."""
        app = _MockApp()
        m = Model(a=1)
        effects = []
        wtx.on(app, m, "a", lambda new, old: effects.append(new))

        t = threading.Thread(target=lambda: m.set(a=2))
        t.start()
        t.join()

        assert effects == [2]
        assert len(app._call_from_thread_log) == 1

    def test_off_with_returned_listener(self):
        app = _MockApp()
        m = Model()
        effects = []
        guarded = wtx.on(app, m, "a", lambda new, old: effects.append(new))
        m.set(a=1)
        m.off("a", guarded)
        m.set(a=2)
        assert effects == [1]


class TestPause:
    def test_pause_restores_on_exception(self):
        app = _MockApp()
        assert wtx.is_safe(app)

        with pytest.raises(RuntimeError):
            with wtx.pause(app):
                assert not wtx.is_safe(app)
                raise RuntimeError("oops")

        # Restored despite exception
        assert wtx.is_safe(app)

    def test_pause_does_not_mutate_app(self):
        """// [LAW:no-shared-mutable-globals] pause state lives in the module, not on the app."""
        app = _MockApp()
        attrs_before = set(vars(app))
        with wtx.pause(app):
            attrs_during = set(vars(app))
        assert attrs_before == attrs_during
        assert attrs_before == set(vars(app))

    def test_multiple_apps_independent(self):
        """Pausing one app does not affect another."""
        app_a = _MockApp()
        app_b = _MockApp()
        with wtx.pause(app_a):
            assert not wtx.is_safe(app_a)
            assert wtx.is_safe(app_b)
