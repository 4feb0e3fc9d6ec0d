"""Sentinel values for property slots.

UNSET marks a property that was never written. OPTIONAL marks a property that
is deliberately absent but should still let a when() combinator fire.
"""

from __future__ import annotations


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


class OptionalMarker:
    """Value for an optional dependency that has intentionally no value.

    when() treats it as defined and passes it through to the callback, so
    callers compare against it with ``is``:

        model.set(label=OPTIONAL)
        model.when(["data", "label"], draw)  # draw(data, OPTIONAL)
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "OPTIONAL"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "OPTIONAL"


UNSET = _Unset()
OPTIONAL = OptionalMarker()


def is_defined(value: object) -> bool:
    """True if when() may pass value to its callback."""
    if value is OPTIONAL:
        return True
    return value is not UNSET and value is not None
