"""Script value helpers: type names and string coercion."""

from typing import Any

from httpbridge._internal.runtime.handles import Handle


def type_name(value: Any) -> str:
    """Return the script-level type name of a host value."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (str, bytes)):
        return "string"
    if isinstance(value, (dict, list, tuple)):
        return "table"
    if isinstance(value, Handle):
        return "userdata"
    if callable(value):
        return "function"
    return "userdata"


def format_number(value: int | float) -> str:
    """Format a number the way scripts print it (integral floats lose ``.0``)."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        if value != value:
            return "nan"
        if value in (float("inf"), float("-inf")):
            return "inf" if value > 0 else "-inf"
        return format(value, ".14g")
    return str(value)


def tostring(value: Any) -> str:
    """Coerce any script value to its string representation.

    Never fails: values that are not strings are converted, not rejected.
    Strings pass through, bytes are decoded as UTF-8 (invalid bytes replaced),
    nil becomes ``"nil"``, booleans ``"true"``/``"false"``, numbers use the
    script number format, and reference values render as ``"<type>: 0x<id>"``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, Handle):
        return str(value)
    return f"{type_name(value)}: 0x{id(value):08x}"
