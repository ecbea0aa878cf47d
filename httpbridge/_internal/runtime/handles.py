"""Opaque, type-tagged handles to native values."""

import itertools
import weakref
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


class Handle:
    """Opaque reference to a native value owned by a HandleArena.

    A handle carries only its id and type tag. The native value stays in the
    arena and is reachable through a type-checked lookup. When the last
    reference to a handle goes away, the arena releases its value.
    """

    __slots__ = ("_id", "_type_name", "_arena", "__weakref__")

    def __init__(self, handle_id: int, type_name: str, arena: "HandleArena") -> None:
        self._id = handle_id
        self._type_name = type_name
        self._arena = arena

    @property
    def id(self) -> int:
        return self._id

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def released(self) -> bool:
        return self not in self._arena

    def __repr__(self) -> str:
        state = " released" if self.released else ""
        return f"<Handle {self._type_name} #{self._id}{state}>"

    def __str__(self) -> str:
        return f"{self._type_name}: 0x{self._id:08x}"


@dataclass(slots=True)
class _Entry:
    type_name: str
    value: Any
    finalizer: Callable[[], None] | None
    reclaim: weakref.finalize


class HandleArena:
    """Registry of live handles and the native values they wrap.

    Releasing a handle, explicitly or by dropping every reference to it, drops
    the arena's reference to the native value and runs its finalizer, if one
    was given at creation.
    """

    def __init__(self) -> None:
        self._entries: dict[int, _Entry] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, handle: object) -> bool:
        return (
            isinstance(handle, Handle)
            and handle._arena is self
            and handle._id in self._entries
        )

    def new(
        self,
        value: Any,
        type_name: str,
        *,
        finalizer: Callable[[], None] | None = None,
    ) -> Handle:
        """Wrap ``value`` in a new handle tagged with ``type_name``."""
        handle = Handle(next(self._ids), type_name, self)
        reclaim = weakref.finalize(handle, self._release_id, handle.id)
        reclaim.atexit = False
        self._entries[handle.id] = _Entry(type_name, value, finalizer, reclaim)
        return handle

    def lookup(self, handle: Handle, type_name: str) -> Any | None:
        """Return the wrapped value if ``handle`` is live and tagged ``type_name``."""
        if handle not in self:
            return None
        entry = self._entries[handle.id]
        if entry.type_name != type_name:
            return None
        return entry.value

    def release(self, handle: Handle) -> bool:
        """Release a handle. Returns False if it was not live in this arena."""
        if handle not in self:
            return False
        return self._release_id(handle.id)

    def release_all(self) -> None:
        for handle_id in list(self._entries):
            self._release_id(handle_id)

    def _release_id(self, handle_id: int) -> bool:
        entry = self._entries.pop(handle_id, None)
        if entry is None:
            return False
        entry.reclaim.detach()
        if entry.finalizer is not None:
            entry.finalizer()
        return True
