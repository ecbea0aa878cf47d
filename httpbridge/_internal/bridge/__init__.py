"""HTTP bridge for the script runtime.

WARNING: These are the raw bridge functions. Scripts reach them through the
module table returned by ``preload``.
"""

from httpbridge._internal.bridge.client import CLIENT_TYPE, do_request, get_cookie, new_client
from httpbridge._internal.bridge.models import ResponseTable
from httpbridge._internal.bridge.module import preload
from httpbridge._internal.bridge.request import (
    REQUEST_TYPE,
    Request,
    header_set,
    new_request,
    set_basic_auth,
)

__all__ = [
    "CLIENT_TYPE",
    "REQUEST_TYPE",
    "Request",
    "ResponseTable",
    "do_request",
    "get_cookie",
    "header_set",
    "new_client",
    "new_request",
    "preload",
    "set_basic_auth",
]
