"""HTTP client collaborator used by the bridge."""

import base64

import httpx

from httpbridge._internal.config import ClientConfig
from httpbridge._internal.cookies import CookieJar
from httpbridge._internal.http import DEFAULT_USER_AGENT, create_http_client
from httpbridge._internal.redaction import format_headers


def basic_auth_header(username: str, password: str) -> str:
    """Build the value of a basic ``Authorization`` header."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {token}"


class HttpClient:
    """Managed HTTP client shared by script requests.

    Wraps an ``httpx.Client`` together with its configuration. ``execute``
    applies the client defaults to a request and sends it; the response is
    returned unread (streaming) so the caller controls when it is closed.

    The client does not add locking of its own. Concurrent use relies on the
    guarantees of ``httpx.Client``.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client options. Defaults are used when omitted.
            client: Existing httpx client to wrap. Created from config if omitted.
        """
        self._config = config or ClientConfig()
        self._client = client if client is not None else create_http_client(self._config)
        self._cookie_jar = CookieJar(self._client.cookies)

    @classmethod
    def from_env(cls) -> "HttpClient":
        """Create a client configured from HTTPBRIDGE_* environment variables."""
        return cls(ClientConfig.from_env())

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cookie_jar(self) -> CookieJar:
        """The cookie jar of the wrapped client."""
        return self._cookie_jar

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._config.debug:
            import sys

            print(f"[httpbridge] {message}", file=sys.stderr)

    def _apply_defaults(self, request: httpx.Request) -> None:
        """Fill in client-level headers the request does not set itself."""
        config = self._config
        for key, value in config.headers.items():
            if key not in request.headers:
                request.headers[key] = value

        if config.user_agent and request.headers.get("User-Agent") == DEFAULT_USER_AGENT:
            request.headers["User-Agent"] = config.user_agent

        if config.basic_auth_user is not None and "Authorization" not in request.headers:
            request.headers["Authorization"] = basic_auth_header(
                config.basic_auth_user, config.basic_auth_password or ""
            )

    def execute(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return the unread response.

        The caller must close the returned response.

        Args:
            request: The request to send. Client defaults and jar cookies are
                applied to it in place.

        Returns:
            The streaming httpx.Response.

        Raises:
            httpx.HTTPError: On transport failure (DNS, connect, TLS, timeout,
                too many redirects).
        """
        self._apply_defaults(request)
        self._cookie_jar.attach(request)

        self.log_debug(
            f"{request.method} {request.url} [{format_headers(request.headers.multi_items())}]"
        )
        try:
            response = self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            self.log_debug(f"{request.method} {request.url} failed: {e!r}")
            raise

        self.log_debug(f"{request.method} {request.url} -> {response.status_code}")
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
