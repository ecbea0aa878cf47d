"""Request handles: construction and mutation from scripts."""

import httpx

from httpbridge._internal.http import DEFAULT_USER_AGENT
from httpbridge._internal.runtime import ABSENT, Handle, Result, ScriptRuntime
from httpbridge._internal.transport import basic_auth_header

REQUEST_TYPE = "http_request"

# RFC 7230 token characters, the set allowed in a method name.
_TOKEN_CHARS = frozenset("!#$%&'*+-.^_`|~0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


class Request:
    """Native request behind a script request handle.

    Method, URL and body are fixed at construction; headers (including the
    Authorization header written by ``set_basic_auth``) stay mutable.
    """

    __slots__ = ("_request",)

    def __init__(self, method: str, url: str, body: bytes = b"") -> None:
        self._request = httpx.Request(method, url, content=body or None)
        # httpx upper-cases the method; methods are case-sensitive.
        self._request.method = method

    @property
    def method(self) -> str:
        return self._request.method

    @property
    def url(self) -> str:
        return str(self._request.url)

    @property
    def body(self) -> bytes:
        return self._request.content

    @property
    def headers(self) -> dict[str, str]:
        """Snapshot of the current headers (first value per name)."""
        headers: dict[str, str] = {}
        for name, value in self._request.headers.multi_items():
            headers.setdefault(name, value)
        return headers

    @property
    def native(self) -> httpx.Request:
        return self._request

    def set_header(self, key: str, value: str) -> None:
        self._request.headers[key] = value

    def set_basic_auth(self, username: str, password: str) -> None:
        self._request.headers["Authorization"] = basic_auth_header(username, password)


def _check_method(method: str) -> str | None:
    if not method:
        return "GET"
    if any(char not in _TOKEN_CHARS for char in method):
        return None
    return method


def new_request(
    runtime: ScriptRuntime,
    method: object = ABSENT,
    url: object = ABSENT,
    body: object = ABSENT,
) -> Result[Handle]:
    """Create a request handle: ``request(method, url, body?)``.

    Args:
        runtime: The script runtime owning the new handle.
        method: HTTP method. Empty means GET; any token is passed through.
        url: Target URL.
        body: Optional body. Strings are sent UTF-8 encoded, bytes as given.
            An empty body is used when omitted.

    Returns:
        Result holding the new handle, or the construction error message.

    Raises:
        ArgumentError: If method, url or body is not a string.
    """
    method = runtime.check_string(method, 1, "request")
    url = runtime.check_string(url, 2, "request")
    if isinstance(body, bytes):
        content = body
    else:
        content = runtime.opt_string(body, 3, "request", default="").encode("utf-8")

    checked_method = _check_method(method)
    if checked_method is None:
        return Result.failure(f"invalid method {method!r}")

    try:
        request = Request(checked_method, url, content)
    except httpx.InvalidURL as e:
        return Result.failure(f"parse {url!r}: {e}")

    request.set_header("User-Agent", DEFAULT_USER_AGENT)
    return Result.success(runtime.new_userdata(request, REQUEST_TYPE))


def set_basic_auth(
    runtime: ScriptRuntime,
    handle: Handle,
    username: object = ABSENT,
    password: object = ABSENT,
) -> None:
    """``request:set_basic_auth(username, password)``.

    Both values are stringified, whatever their type.
    """
    request = runtime.check_userdata(handle, REQUEST_TYPE, 1, "set_basic_auth")
    username = runtime.tostring(runtime.check_any(username, 2, "set_basic_auth"))
    password = runtime.tostring(runtime.check_any(password, 3, "set_basic_auth"))
    request.set_basic_auth(username, password)


def header_set(
    runtime: ScriptRuntime,
    handle: Handle,
    key: object = ABSENT,
    value: object = ABSENT,
) -> None:
    """``request:header_set(key, value)``. Overwrites; last write wins."""
    request = runtime.check_userdata(handle, REQUEST_TYPE, 1, "header_set")
    key = runtime.tostring(runtime.check_any(key, 2, "header_set"))
    value = runtime.tostring(runtime.check_any(value, 3, "header_set"))
    request.set_header(key, value)
