"""Property store — named values whose writes notify listeners synchronously.

Every write goes through write(): the value is stored first, then each
listener registered for the name is called as listener(new, old), in
registration order. Batching is not done here; see scheduler.py.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from whenx.exceptions import UnknownPropertyError
from whenx.markers import UNSET
from whenx.registry import ListenerRegistry


class PropertyStore:
    """Current values for a growing set of tracked property names."""

    def __init__(
        self,
        registry: ListenerRegistry,
        *,
        strict: bool = False,
        known: Iterable[str] = (),
    ) -> None:
        self._registry = registry
        self._values: dict[str, object] = {}
        self._strict = strict
        self._known = frozenset(known)

    @property
    def strict(self) -> bool:
        return self._strict

    def track(self, name: str) -> None:
        """Create the slot for name if it does not exist yet."""
        if name in self._values:
            return
        if self._strict and name not in self._known:
            raise UnknownPropertyError(name)
        self._values[name] = UNSET

    def read(self, name: str) -> object:
        """Current value of name, or UNSET if never written."""
        self.track(name)
        return self._values[name]

    def write(self, name: str, value: object) -> None:
        self.track(name)
        old = self._values[name]
        self._values[name] = value
        for entry in self._registry.listeners(name):
            entry(value, old)

    def set_many(self, values: Mapping[str, object]) -> None:
        """write() each item in order. Each write fans out on its own."""
        for name, value in values.items():
            self.write(name, value)

    def names(self) -> list[str]:
        return list(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"PropertyStore({self._values!r})"
