"""Script runtime state: handle tracking, method tables and argument checks."""

from collections.abc import Callable, Mapping
from typing import Any

from httpbridge._internal.runtime.handles import Handle, HandleArena
from httpbridge._internal.runtime.values import format_number, tostring
from httpbridge._internal.runtime.values import type_name as script_type
from httpbridge.exceptions import ArgumentError, ScriptRuntimeError


class _Absent:
    """Marker for an argument the script did not pass at all."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


class ScriptRuntime:
    """Host-side state shared by the functions exposed to a script.

    Owns the handle arena and the per-type method tables, and provides the
    argument checks bridge functions use. Tables are plain dicts and nil is
    None.
    """

    def __init__(self) -> None:
        self.handles = HandleArena()
        self._methods: dict[str, dict[str, Callable[..., Any]]] = {}

    # =========================================================================
    # Types and handles
    # =========================================================================

    def register_type(self, type_name: str, methods: Mapping[str, Callable[..., Any]]) -> None:
        """Register (or extend) the method table for handles tagged ``type_name``."""
        self._methods.setdefault(type_name, {}).update(methods)

    def methods(self, type_name: str) -> dict[str, Callable[..., Any]]:
        return dict(self._methods.get(type_name, {}))

    def new_userdata(
        self,
        value: Any,
        type_name: str,
        *,
        finalizer: Callable[[], None] | None = None,
    ) -> Handle:
        """Wrap a native value in a new opaque handle."""
        return self.handles.new(value, type_name, finalizer=finalizer)

    def release(self, handle: Handle) -> bool:
        """Release a handle, running its finalizer. False if it was not live."""
        return self.handles.release(handle)

    def close(self) -> None:
        """Release every live handle."""
        self.handles.release_all()

    def __enter__(self) -> "ScriptRuntime":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def call_method(self, handle: Any, name: str, *args: Any) -> Any:
        """Call ``handle:name(*args)`` through the handle's method table.

        Raises:
            ScriptRuntimeError: If ``handle`` is not a handle or its type has no
                method called ``name``.
        """
        if not isinstance(handle, Handle):
            raise ScriptRuntimeError(f"attempt to index a {script_type(handle)} value")
        method = self._methods.get(handle.type_name, {}).get(name)
        if method is None:
            raise ScriptRuntimeError(
                f"attempt to call a nil value (method '{name}' on {handle.type_name})"
            )
        return method(handle, *args)

    # =========================================================================
    # Argument checks
    # =========================================================================

    def check_userdata(self, value: Any, type_name: str, position: int, function: str) -> Any:
        """Return the native value behind a handle tagged ``type_name``.

        Raises:
            ArgumentError: If ``value`` is not a live handle of that type.
        """
        if not isinstance(value, Handle):
            got = "no value" if value is ABSENT else script_type(value)
            raise ArgumentError(position, function, f"{type_name} expected, got {got}")

        native = self.handles.lookup(value, type_name)
        if native is None:
            if value.released:
                raise ArgumentError(position, function, f"{type_name} expected, got released handle")
            if value not in self.handles:
                raise ArgumentError(position, function, f"{type_name} expected, got foreign handle")
            raise ArgumentError(position, function, f"{type_name} expected, got {value.type_name}")
        return native

    def check_string(self, value: Any, position: int, function: str) -> str:
        """Return ``value`` as a string. Numbers are accepted and converted."""
        if isinstance(value, str):
            return value
        if isinstance(value, bytes):
            return tostring(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return format_number(value)
        got = "no value" if value is ABSENT else script_type(value)
        raise ArgumentError(position, function, f"string expected, got {got}")

    def opt_string(
        self, value: Any, position: int, function: str, default: str | None = None
    ) -> str | None:
        """Like check_string, but nil or a missing argument gives ``default``."""
        if value is None or value is ABSENT:
            return default
        return self.check_string(value, position, function)

    def check_any(self, value: Any, position: int, function: str) -> Any:
        """Require that an argument was passed. nil counts as passed."""
        if value is ABSENT:
            raise ArgumentError(position, function, "value expected")
        return value

    def opt_table(self, value: Any, position: int, function: str) -> dict[str, Any]:
        """Return a table argument, or an empty one for nil / missing."""
        if value is None or value is ABSENT:
            return {}
        if not isinstance(value, Mapping):
            raise ArgumentError(position, function, f"table expected, got {script_type(value)}")
        return dict(value)

    # =========================================================================
    # Values
    # =========================================================================

    def tostring(self, value: Any) -> str:
        return tostring(value)

    def new_table(self, fields: Mapping[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
        table = dict(fields or {})
        table.update(kwargs)
        return table
