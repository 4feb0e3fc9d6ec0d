"""Shared pytest fixtures for whenx tests."""

import pytest

import whenx._tick as _tick_mod
import whenx.model as _model_mod


@pytest.fixture(autouse=True)
def reset_tick_state():
    """Start and end every test with an empty tick queue and no installed hooks."""
    _tick_mod._queue.clear()
    yield
    _tick_mod._queue.clear()
    _tick_mod._deferrer = None
    _tick_mod._drain_target = None
    _model_mod._marshal = None
    _model_mod._marshal_thread = None
