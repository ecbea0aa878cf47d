"""Cookie jar view over an httpx client's cookie store."""

import urllib.request
from http.cookiejar import Cookie, DefaultCookiePolicy

import httpx

_MATCHING_SCHEMES = frozenset({"http", "https"})


class CookieJar:
    """Read-only, URL-keyed view of an ``httpx.Cookies`` store.

    Matching (domain, path, secure flag, expiry, port) uses the checks of the
    standard library cookie policy behind ``httpx.Cookies``, the same rules
    used when attaching cookies to an outgoing request.
    """

    def __init__(self, cookies: httpx.Cookies) -> None:
        self._cookies = cookies
        self._policy = DefaultCookiePolicy()

    def __len__(self) -> int:
        return len(self._cookies.jar)

    def attach(self, request: httpx.Request) -> None:
        """Add a Cookie header for matching cookies unless the request has one."""
        if request.url.scheme in _MATCHING_SCHEMES:
            self._cookies.set_cookie_header(request)

    def _matches(self, cookie: Cookie, request: urllib.request.Request) -> bool:
        policy = self._policy
        return (
            policy.domain_return_ok(cookie.domain, request)
            and policy.path_return_ok(cookie.path, request)
            and not cookie.is_expired()
            and policy.return_ok_version(cookie, request)
            and policy.return_ok_verifiability(cookie, request)
            and policy.return_ok_secure(cookie, request)
            and policy.return_ok_port(cookie, request)
            and policy.return_ok_domain(cookie, request)
        )

    def cookies_for(self, url: httpx.URL | None) -> list[tuple[str, str]] | None:
        """Return the (name, value) pairs that would be sent to ``url``.

        Pairs come in jar order: longest path first. Returns None when nothing
        matches, when ``url`` is None, or when the scheme is not http/https.
        """
        if url is None or url.scheme not in _MATCHING_SCHEMES or not url.host:
            return None

        request = urllib.request.Request(str(url))
        matched = [cookie for cookie in self._cookies.jar if self._matches(cookie, request)]
        if not matched:
            return None

        matched.sort(key=lambda cookie: len(cookie.path), reverse=True)
        return [(cookie.name, cookie.value or "") for cookie in matched]
