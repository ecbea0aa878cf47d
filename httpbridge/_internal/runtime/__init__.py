"""Script runtime collaborator: handles, values and results."""

from httpbridge._internal.runtime.handles import Handle, HandleArena
from httpbridge._internal.runtime.result import Result
from httpbridge._internal.runtime.state import ABSENT, ScriptRuntime
from httpbridge._internal.runtime.values import tostring, type_name

__all__ = [
    "ABSENT",
    "Handle",
    "HandleArena",
    "Result",
    "ScriptRuntime",
    "tostring",
    "type_name",
]
