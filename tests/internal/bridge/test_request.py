"""Tests for request handles."""

import base64
import gc

import pytest

from httpbridge._internal.bridge.client import CLIENT_TYPE
from httpbridge._internal.bridge.request import (
    REQUEST_TYPE,
    Request,
    header_set,
    new_request,
    set_basic_auth,
)
from httpbridge._internal.http import DEFAULT_USER_AGENT
from httpbridge._internal.runtime import ScriptRuntime
from httpbridge.exceptions import ArgumentError


@pytest.fixture
def runtime():
    with ScriptRuntime() as rt:
        yield rt


def native(runtime: ScriptRuntime, handle) -> Request:
    return runtime.check_userdata(handle, REQUEST_TYPE, 1, "test")


class TestNewRequest:
    """Tests for new_request."""

    def test_returns_handle(self, runtime):
        """Should return a handle tagged as a request."""
        result = new_request(runtime, "GET", "http://example.com/path")
        assert result.is_ok
        handle = result.value
        assert handle.type_name == REQUEST_TYPE

        request = native(runtime, handle)
        assert request.method == "GET"
        assert request.url == "http://example.com/path"

    def test_sets_default_user_agent(self, runtime):
        """Should carry the default User-Agent before any mutation."""
        handle = new_request(runtime, "GET", "http://example.com/").value
        assert native(runtime, handle).native.headers["User-Agent"] == DEFAULT_USER_AGENT

    def test_user_agent_can_be_overwritten(self, runtime):
        """Should let header_set replace the default User-Agent."""
        handle = new_request(runtime, "GET", "http://example.com/").value
        header_set(runtime, handle, "User-Agent", "my-script/2.0")
        assert native(runtime, handle).native.headers.get_list("User-Agent") == ["my-script/2.0"]

    def test_body(self, runtime):
        """Should keep the given body."""
        handle = new_request(runtime, "POST", "http://example.com/", '{"a": 1}').value
        assert native(runtime, handle).body == b'{"a": 1}'

    def test_body_defaults_to_empty(self, runtime):
        """Should use an empty body when none is given."""
        handle = new_request(runtime, "POST", "http://example.com/").value
        assert native(runtime, handle).body == b""

    def test_binary_body_kept_verbatim(self, runtime):
        """Should keep non-UTF-8 bytes unchanged."""
        payload = b"\x89PNG\xff\x00\x80"
        handle = new_request(runtime, "POST", "http://example.com/", payload).value
        assert native(runtime, handle).body == payload

    def test_nil_body_is_empty(self, runtime):
        handle = new_request(runtime, "POST", "http://example.com/", None).value
        assert native(runtime, handle).body == b""

    def test_empty_method_means_get(self, runtime):
        handle = new_request(runtime, "", "http://example.com/").value
        assert native(runtime, handle).method == "GET"

    def test_custom_method_passes_through(self, runtime):
        """Should not restrict the method to a fixed verb set."""
        handle = new_request(runtime, "PROPFIND", "http://example.com/").value
        assert native(runtime, handle).method == "PROPFIND"

    def test_method_case_preserved(self, runtime):
        """Should not change the case of the method."""
        handle = new_request(runtime, "purge", "http://example.com/").value
        request = native(runtime, handle)
        assert request.method == "purge"
        assert request.native.method == "purge"

    def test_invalid_method(self, runtime):
        """Should fail with a message for a method that is not a token."""
        result = new_request(runtime, "GE T", "http://example.com/")
        value, error = result.unpack()
        assert value is None
        assert "invalid method" in error

    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com:abc/",
            "http://example.com/\x00",
        ],
    )
    def test_malformed_url(self, runtime, url):
        """Should fail with a non-empty message for malformed URLs."""
        value, error = new_request(runtime, "GET", url).unpack()
        assert value is None
        assert error

    def test_malformed_url_allocates_no_handle(self, runtime):
        result = new_request(runtime, "GET", "http://example.com:abc/")
        assert result.value is None
        assert len(runtime.handles) == 0

    def test_dropped_requests_are_released(self, runtime):
        """Should not accumulate handles for requests the script drops."""
        for _ in range(100):
            new_request(runtime, "GET", "http://example.com/")
        gc.collect()
        assert len(runtime.handles) == 0

    def test_each_call_allocates_fresh_request(self, runtime):
        """Should never alias two handles to one native request."""
        first = new_request(runtime, "GET", "http://example.com/").value
        second = new_request(runtime, "GET", "http://example.com/").value
        assert first is not second
        assert native(runtime, first) is not native(runtime, second)
        assert native(runtime, first).native is not native(runtime, second).native

    def test_method_must_be_string(self, runtime):
        """Should raise an argument error for a non-string method."""
        with pytest.raises(ArgumentError) as exc_info:
            new_request(runtime, {"verb": "GET"}, "http://example.com/")
        assert exc_info.value.position == 1

    def test_url_required(self, runtime):
        with pytest.raises(ArgumentError) as exc_info:
            new_request(runtime, "GET")
        assert exc_info.value.position == 2


class TestSetBasicAuth:
    """Tests for set_basic_auth."""

    def test_sets_authorization_header(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        set_basic_auth(runtime, handle, "user", "pass")

        header = native(runtime, handle).native.headers["Authorization"]
        assert header.startswith("Basic ")
        assert base64.b64decode(header[len("Basic "):]) == b"user:pass"

    def test_overwrites_previous_credentials(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        set_basic_auth(runtime, handle, "old", "secret")
        set_basic_auth(runtime, handle, "new", "secret")

        headers = native(runtime, handle).native.headers
        assert len(headers.get_list("Authorization")) == 1
        assert base64.b64decode(headers["Authorization"][6:]) == b"new:secret"

    def test_stringifies_non_string_values(self, runtime):
        """Should convert any value instead of rejecting it."""
        handle = new_request(runtime, "GET", "http://example.com/").value
        set_basic_auth(runtime, handle, 42, True)

        header = native(runtime, handle).native.headers["Authorization"]
        assert base64.b64decode(header[6:]) == b"42:true"

    def test_missing_password(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        with pytest.raises(ArgumentError) as exc_info:
            set_basic_auth(runtime, handle, "user")
        assert exc_info.value.position == 3


class TestHeaderSet:
    """Tests for header_set."""

    def test_last_write_wins(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        header_set(runtime, handle, "X-Token", "a")
        header_set(runtime, handle, "X-Token", "b")
        assert native(runtime, handle).native.headers.get_list("X-Token") == ["b"]

    def test_idempotent(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        header_set(runtime, handle, "X-Token", "a")
        header_set(runtime, handle, "X-Token", "a")
        assert native(runtime, handle).native.headers.get_list("X-Token") == ["a"]

    def test_stringifies_values(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        header_set(runtime, handle, "X-Int", 1.0)
        header_set(runtime, handle, "X-Float", 1.5)
        header_set(runtime, handle, 7, False)

        headers = native(runtime, handle).headers
        assert headers["x-int"] == "1"
        assert headers["x-float"] == "1.5"
        assert headers["7"] == "false"

    def test_missing_value(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        with pytest.raises(ArgumentError) as exc_info:
            header_set(runtime, handle, "X-Token")
        assert exc_info.value.position == 3

    def test_rejects_client_handle(self, runtime):
        """Should raise an argument error for a handle of another type."""
        client_handle = runtime.new_userdata(object(), CLIENT_TYPE)
        with pytest.raises(ArgumentError) as exc_info:
            header_set(runtime, client_handle, "X", "y")
        assert exc_info.value.position == 1
        assert "http_request expected, got http_client" in str(exc_info.value)

    def test_rejects_plain_value(self, runtime):
        with pytest.raises(ArgumentError) as exc_info:
            header_set(runtime, "not a handle", "X", "y")
        assert "http_request expected, got string" in str(exc_info.value)

    def test_rejects_released_handle(self, runtime):
        handle = new_request(runtime, "GET", "http://example.com/").value
        runtime.release(handle)
        with pytest.raises(ArgumentError):
            header_set(runtime, handle, "X", "y")
