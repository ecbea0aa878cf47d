"""Client handles: dispatch and cookie lookup from scripts."""

from typing import Any

import httpx
from pydantic import ValidationError

from httpbridge._internal.bridge.models import ResponseTable
from httpbridge._internal.bridge.request import REQUEST_TYPE, Request
from httpbridge._internal.config import ClientConfig
from httpbridge._internal.runtime import ABSENT, Handle, Result, ScriptRuntime
from httpbridge._internal.transport import HttpClient
from httpbridge.exceptions import ArgumentError

CLIENT_TYPE = "http_client"


def new_client(runtime: ScriptRuntime, options: object = ABSENT) -> Handle:
    """Create a client handle: ``client(options?)``.

    The handle owns the underlying httpx client and closes it when released.

    Args:
        runtime: The script runtime owning the new handle.
        options: Optional table of ClientConfig fields.

    Returns:
        The new client handle.

    Raises:
        ArgumentError: If options is not a table or holds invalid values.
    """
    fields = runtime.opt_table(options, 1, "client")
    try:
        config = ClientConfig.model_validate(fields)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ArgumentError(1, "client", f"invalid options: {errors}") from e

    client = HttpClient(config)
    return runtime.new_userdata(client, CLIENT_TYPE, finalizer=client.close)


def do_request(
    runtime: ScriptRuntime,
    client_handle: Handle,
    request_handle: Handle = ABSENT,
) -> Result[dict[str, Any]]:
    """``client:do_request(request)``.

    Blocks for the whole exchange. The response body is read fully into
    memory and the response is closed on every path.

    Returns:
        Result holding ``{"code": int, "body": bytes, "headers": {...}}``, or the
        transport / body-read error message.

    Raises:
        ArgumentError: If either handle has the wrong type.
    """
    client: HttpClient = runtime.check_userdata(client_handle, CLIENT_TYPE, 1, "do_request")
    request: Request = runtime.check_userdata(request_handle, REQUEST_TYPE, 2, "do_request")

    try:
        response = client.execute(request.native)
    except httpx.HTTPError as e:
        return Result.from_exception(e)

    try:
        response.read()
    except httpx.HTTPError as e:
        client.log_debug(f"reading body of {request.method} {request.url} failed: {e!r}")
        return Result.from_exception(e)
    finally:
        response.close()

    return Result.success(runtime.new_table(ResponseTable.from_response(response).to_table()))


def get_cookie(
    runtime: ScriptRuntime,
    client_handle: Handle,
    url: object = ABSENT,
) -> dict[str, str] | None:
    """``client:get_cookie(url)``.

    Returns:
        Cookie name -> value for the cookies the jar would send to ``url``, or
        None when there are none. An unparsable URL also yields None.
    """
    client: HttpClient = runtime.check_userdata(client_handle, CLIENT_TYPE, 1, "get_cookie")
    raw_url = runtime.check_string(url, 2, "get_cookie")

    parsed: httpx.URL | None
    try:
        parsed = httpx.URL(raw_url)
    except httpx.InvalidURL as e:
        client.log_debug(f"get_cookie: cannot parse {raw_url!r}: {e}")
        parsed = None

    cookies = client.cookie_jar.cookies_for(parsed)
    if cookies is None:
        return None

    result = runtime.new_table()
    for name, value in cookies:
        result[name] = value
    return result
