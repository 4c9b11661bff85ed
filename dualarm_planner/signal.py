"""A signal that calls every connected slot when emitted."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any


class Signal:
    """Holds callbacks keyed by connection id and calls them in connection order."""

    def __init__(self) -> None:
        self._next_id = 0
        self._slots: dict[int, Callable[..., Any]] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __copy__(self) -> Signal:
        # a copied signal starts with no connections
        return Signal()

    def connect(self, slot: Callable[..., Any]) -> int:
        """Connect ``slot`` and return its connection id."""
        if not callable(slot):
            raise TypeError("slot must be callable")
        self._next_id += 1
        self._slots[self._next_id] = slot
        return self._next_id

    def disconnect(self, connection_id: int) -> None:
        """Remove one connection; unknown ids are ignored."""
        self._slots.pop(connection_id, None)

    def disconnect_many(self, connection_ids: Iterable[int]) -> None:
        """Remove every connection whose id is listed."""
        for connection_id in connection_ids:
            self.disconnect(connection_id)

    def disconnect_all(self) -> None:
        """Remove every connection."""
        self._slots.clear()

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``, in ascending id order."""
        for _, slot in sorted(self._slots.items()):
            slot(*args)