"""Tests for the LoginClient."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest
from conftest import BASE_URL, FakeTransport, json_response

from vagrant_login import (
    APIError,
    LoginClient,
    ServerRejected,
    ServerUnreachable,
    Unauthenticated,
    UnexpectedFailure,
)
from vagrant_login._http import ConnectionFailure
from vagrant_login.auth.constants import TOKEN_ENV
from vagrant_login.config import USER_AGENT

AUTH_URL = f"{BASE_URL}/api/v1/authenticate"


class TestLoginClientInit:
    def test_base_url_is_sanitized(self, token_source):
        client = LoginClient(token_source, base_url="https://custom.example.test/")
        assert client.base_url == "https://custom.example.test"

    def test_base_url_from_environment(self, token_source):
        client = LoginClient(token_source, environ={"VAGRANT_SERVER_URL": "https://vagrant.internal/"})
        assert client.base_url == "https://vagrant.internal"

    def test_default_base_url(self, token_source):
        assert LoginClient(token_source, environ={}).base_url == "https://vagrantcloud.com"


class TestIsAuthenticated:
    def test_no_token_skips_network(self, client, transport):
        assert client.is_authenticated() is False
        assert transport.requests == []

    def test_valid_token(self, client, transport, environ):
        environ[TOKEN_ENV] = "tok"
        transport.outcomes.append(json_response(200, b"{}"))

        assert client.is_authenticated() is True

        request = transport.requests[0]
        assert request["method"] == "GET"
        assert request["url"] == AUTH_URL
        assert request["params"] == {"access_token": "tok"}
        assert request["headers"]["Content-Type"] == "application/json"

    def test_uses_stored_token(self, client, transport, token_source):
        token_source.store("stored")
        transport.outcomes.append(json_response(200, b"{}"))

        assert client.is_authenticated() is True
        assert transport.requests[0]["params"] == {"access_token": "stored"}

    def test_401_returns_false(self, client, transport, environ):
        environ[TOKEN_ENV] = "expired"
        transport.outcomes.append(json_response(401, b'{"errors":["unauthorized"]}'))

        assert client.is_authenticated() is False

    def test_406_raises_server_rejected(self, client, transport, environ):
        environ[TOKEN_ENV] = "tok"
        transport.outcomes.append(json_response(406, b'{"errors":["bad token"]}'))

        with pytest.raises(ServerRejected) as exc_info:
            client.is_authenticated()
        assert str(exc_info.value) == "bad token"

    def test_406_with_garbage_raises_unexpected_failure(self, client, transport, environ):
        environ[TOKEN_ENV] = "tok"
        transport.outcomes.append(json_response(406, b"not json", "Not Acceptable"))

        with pytest.raises(UnexpectedFailure):
            client.is_authenticated()

    def test_unreachable_server(self, client, transport, environ):
        environ[TOKEN_ENV] = "tok"
        transport.outcomes.append(ConnectionFailure("getaddrinfo failed"))

        with pytest.raises(ServerUnreachable) as exc_info:
            client.is_authenticated()
        assert exc_info.value.address == BASE_URL

    def test_other_errors_are_not_folded_into_false(self, client, transport, environ):
        environ[TOKEN_ENV] = "tok"
        transport.outcomes.append(json_response(503, b"maintenance"))

        with pytest.raises(APIError) as exc_info:
            client.is_authenticated()
        assert exc_info.value.status_code == 503

    def test_token_resolved_on_every_call(self, client, transport, environ):
        transport.outcomes.extend([json_response(200, b"{}"), json_response(200, b"{}")])
        environ[TOKEN_ENV] = "first"
        client.is_authenticated()
        environ[TOKEN_ENV] = "second"
        client.is_authenticated()

        assert [r["params"]["access_token"] for r in transport.requests] == ["first", "second"]


class TestCheckToken:
    def test_checks_explicit_token(self, client, transport, environ):
        environ[TOKEN_ENV] = "ambient"
        transport.outcomes.append(json_response(200, b"{}"))

        assert client.check_token("explicit") is True
        assert transport.requests[0]["params"] == {"access_token": "explicit"}

    def test_invalid_token(self, client, transport):
        transport.outcomes.append(json_response(401, b""))
        assert client.check_token("bogus") is False


class TestLogin:
    def test_returns_token(self, client, transport):
        transport.outcomes.append(json_response(200, b'{"token":"new-token"}'))

        assert client.login("hashicorp", "s3cret", description="laptop") == "new-token"

        request = transport.requests[0]
        assert request["method"] == "POST"
        assert request["url"] == AUTH_URL
        assert request["json"] == {
            "user": {"login": "hashicorp", "password": "s3cret"},
            "token": {"description": "laptop"},
        }
        assert request["headers"] == {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def test_description_defaults_to_null(self, client, transport):
        transport.outcomes.append(json_response(200, b'{"token":"t"}'))
        client.login("hashicorp", "s3cret")
        assert transport.requests[0]["json"]["token"] == {"description": None}

    def test_null_token_passed_through(self, client, transport):
        transport.outcomes.append(json_response(200, b'{"token": null}'))
        assert client.login("hashicorp", "wrong") is None

    def test_missing_token_field_passed_through(self, client, transport):
        transport.outcomes.append(json_response(200, b"{}"))
        assert client.login("hashicorp", "wrong") is None

    def test_non_json_success_body_raises_unexpected_failure(self, client, transport):
        transport.outcomes.append(json_response(200, b"<html>maintenance</html>", "OK"))
        with pytest.raises(UnexpectedFailure) as exc_info:
            client.login("hashicorp", "s3cret")
        assert "200 OK" in exc_info.value.detail
        assert "maintenance" in exc_info.value.detail

    def test_empty_success_body_raises_unexpected_failure(self, client, transport):
        transport.outcomes.append(json_response(204, b""))
        with pytest.raises(UnexpectedFailure):
            client.login("hashicorp", "s3cret")

    def test_token_not_persisted(self, client, transport, token_source, token_path):
        transport.outcomes.append(json_response(200, b'{"token":"new-token"}'))
        client.login("hashicorp", "s3cret")
        assert not token_path.exists()
        assert token_source.resolve() is None

    def test_ignores_existing_token(self, client, transport, environ):
        environ[TOKEN_ENV] = "existing"
        transport.outcomes.append(json_response(200, b'{"token":"new-token"}'))

        assert client.login("hashicorp", "s3cret") == "new-token"
        assert "params" not in transport.requests[0]

    def test_401_raises_unauthenticated(self, client, transport):
        transport.outcomes.append(json_response(401, b""))
        with pytest.raises(Unauthenticated):
            client.login("hashicorp", "wrong")

    def test_406_raises_server_rejected(self, client, transport):
        transport.outcomes.append(json_response(406, b'{"errors":["2FA required","try again"]}'))
        with pytest.raises(ServerRejected) as exc_info:
            client.login("hashicorp", "s3cret")
        assert exc_info.value.messages == ("2FA required", "try again")

    def test_dns_failure_raises_server_unreachable(self, client, transport):
        transport.outcomes.append(ConnectionFailure("Name or service not known"))
        with pytest.raises(ServerUnreachable) as exc_info:
            client.login("hashicorp", "s3cret")
        assert exc_info.value.address == BASE_URL


class TestLoginProxy:
    @pytest.mark.parametrize(
        "env,expected",
        [
            ({}, None),
            ({"http_proxy": "http://h-lower"}, "http://h-lower"),
            ({"HTTP_PROXY": "http://h-upper", "http_proxy": "http://h-lower"}, "http://h-upper"),
            ({"https_proxy": "http://s-lower", "HTTP_PROXY": "http://h-upper"}, "http://s-lower"),
            ({"HTTPS_PROXY": "http://s-upper", "https_proxy": "http://s-lower"}, "http://s-upper"),
        ],
    )
    def test_proxy_lookup_order(self, env, expected, token_source):
        transport = FakeTransport(json_response(200, b'{"token":"t"}'))
        client = LoginClient(token_source, base_url=BASE_URL, environ=env, transport=transport)

        client.login("hashicorp", "s3cret")

        assert transport.requests[0]["proxy"] == expected


class TestLoginOverHttpx:
    """End-to-end through the default httpx transport."""

    def test_login_wire_format(self, token_source):
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = 200
        mock_response.content = b'{"token":"wire-token"}'
        mock_response.reason_phrase = "OK"

        client = LoginClient(token_source, base_url=BASE_URL, environ={})
        with patch.object(httpx.Client, "request", return_value=mock_response) as mock_request:
            assert client.login("hashicorp", "s3cret") == "wire-token"

        args, kwargs = mock_request.call_args
        assert args == ("POST", AUTH_URL)
        assert kwargs["json"]["user"]["login"] == "hashicorp"
        assert kwargs["headers"]["User-Agent"] == USER_AGENT

    def test_dns_failure(self, token_source):
        client = LoginClient(token_source, base_url=BASE_URL, environ={})
        with patch.object(httpx.Client, "request", side_effect=httpx.ConnectError("Name or service not known")):
            with pytest.raises(ServerUnreachable) as exc_info:
                client.login("hashicorp", "s3cret")
        assert exc_info.value.address == BASE_URL
