"""httpbridge: HTTP requests for embedded scripts.

Exposes an ``http`` module to a script runtime. Scripts build requests as
opaque handles, mutate their headers, dispatch them through a managed httpx
client and get plain dict/str/int values back.

Public API:
    ScriptRuntime - Host-side runtime state (handles, method tables)
    preload - Install the http module into a runtime
    HttpClient - Managed client wrapped by client handles
    ClientConfig - Client options
    DEFAULT_USER_AGENT - User-Agent set on every new request

Example:
    runtime = ScriptRuntime()
    http = preload(runtime)
    client = http["client"]({"timeout": 5})
    req, err = http["request"]("GET", "https://example.com")
    response, err = runtime.call_method(client, "do_request", req)
"""

from httpbridge._internal.bridge import CLIENT_TYPE, REQUEST_TYPE, preload
from httpbridge._internal.config import ClientConfig
from httpbridge._internal.http import DEFAULT_USER_AGENT
from httpbridge._internal.runtime import ScriptRuntime
from httpbridge._internal.transport import HttpClient
from httpbridge._version import __version__

__all__ = [
    "__version__",
    "CLIENT_TYPE",
    "REQUEST_TYPE",
    "DEFAULT_USER_AGENT",
    "ClientConfig",
    "HttpClient",
    "ScriptRuntime",
    "preload",
]
