"""Client configuration for httpbridge."""

import os

from pydantic import BaseModel, Field, ValidationError, field_validator

from httpbridge.exceptions import ConfigError

# =============================================================================
# Constants
# =============================================================================

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_REDIRECTS = 10

_TRUE_VALUES = frozenset({"1", "true", "yes"})


class ClientConfig(BaseModel):
    """Options for a client created by the bridge.

    Fields:
        timeout: Request timeout in seconds. None disables the timeout.
        insecure_ssl: Skip TLS certificate verification.
        proxy: Proxy URL for all requests.
        user_agent: Replaces the default request User-Agent.
        basic_auth_user: Username applied to requests without Authorization.
        basic_auth_password: Password paired with basic_auth_user.
        headers: Headers added to requests that do not set them.
        follow_redirects: Follow 3xx responses.
        max_redirects: Maximum number of redirects to follow.
        debug: Enable debug logging to stderr.
    """

    timeout: float | None = Field(default=DEFAULT_TIMEOUT, ge=0)
    insecure_ssl: bool = False
    proxy: str | None = None
    user_agent: str | None = None
    basic_auth_user: str | None = None
    basic_auth_password: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    follow_redirects: bool = True
    max_redirects: int = Field(default=DEFAULT_MAX_REDIRECTS, ge=0)
    debug: bool = False

    model_config = {"extra": "forbid"}

    @field_validator("proxy", "user_agent")
    @classmethod
    def empty_as_none(cls, v: str | None) -> str | None:
        return v or None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create a client configuration from environment variables.

        Optional environment variables:
            HTTPBRIDGE_TIMEOUT_MS: Request timeout in milliseconds.
            HTTPBRIDGE_INSECURE_SSL: Set to "1" to skip TLS verification.
            HTTPBRIDGE_PROXY: Proxy URL.
            HTTPBRIDGE_USER_AGENT: User-Agent replacing the request default.
            HTTPBRIDGE_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A ClientConfig. Unset variables keep their defaults.

        Raises:
            ValueError: If HTTPBRIDGE_TIMEOUT_MS is not a valid integer.
            ConfigError: If the resulting configuration is invalid.
        """
        timeout = DEFAULT_TIMEOUT
        timeout_ms = os.environ.get("HTTPBRIDGE_TIMEOUT_MS")
        if timeout_ms:
            timeout = int(timeout_ms) / 1000

        try:
            return cls(
                timeout=timeout,
                insecure_ssl=os.environ.get("HTTPBRIDGE_INSECURE_SSL", "").lower() in _TRUE_VALUES,
                proxy=os.environ.get("HTTPBRIDGE_PROXY"),
                user_agent=os.environ.get("HTTPBRIDGE_USER_AGENT"),
                debug=os.environ.get("HTTPBRIDGE_DEBUG", "") == "1",
            )
        except ValidationError as e:
            raise ConfigError(str(e)) from e
