"""Script-visible ``http`` module."""

import functools
from collections.abc import Callable
from typing import Any

from httpbridge._internal.bridge import client, request
from httpbridge._internal.runtime import Result, ScriptRuntime


def _export(runtime: ScriptRuntime, func: Callable[..., Any]) -> Callable[..., Any]:
    """Bind a bridge function to ``runtime`` and unpack Results for the script."""

    @functools.wraps(func)
    def script_function(*args: Any) -> Any:
        result = func(runtime, *args)
        if isinstance(result, Result):
            return result.unpack()
        return result

    return script_function


def preload(runtime: ScriptRuntime) -> dict[str, Any]:
    """Register the request and client types and return the module table.

    Args:
        runtime: The script runtime to install into.

    Returns:
        ``{"request": ..., "client": ...}``. Methods on the returned handles are
        called with ``runtime.call_method(handle, name, *args)``.
    """
    runtime.register_type(
        request.REQUEST_TYPE,
        {
            "set_basic_auth": _export(runtime, request.set_basic_auth),
            "header_set": _export(runtime, request.header_set),
        },
    )
    runtime.register_type(
        client.CLIENT_TYPE,
        {
            "do_request": _export(runtime, client.do_request),
            "get_cookie": _export(runtime, client.get_cookie),
        },
    )
    return runtime.new_table(
        request=_export(runtime, request.new_request),
        client=_export(runtime, client.new_client),
    )
