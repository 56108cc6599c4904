"""
Black Duck connectivity adapter tests.

Exercises token and credential authentication against an in-memory
httpx transport.
"""

from __future__ import annotations

import httpx
import pytest

from src.adapters.blackduck import BlackDuckClient, BlackDuckConnectivityChecker
from src.components.product_decision import BlackDuckServerConfig

URL = "https://bd.example.com"


def make_transport(
    auth_status: int = 200,
    version_status: int = 200,
    auth_json: object | None = None,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.path == "/api/tokens/authenticate":
            body = {"bearerToken": "bearer-123"} if auth_json is None else auth_json
            return httpx.Response(auth_status, json=body)
        if request.url.path == "/j_spring_security_check":
            return httpx.Response(auth_status)
        if request.url.path == "/api/current-version":
            return httpx.Response(version_status, json={"version": "2020.4.0"})
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
def token_config() -> BlackDuckServerConfig:
    return BlackDuckServerConfig(url=URL, api_token="api-token", timeout=5)


class TestTokenAuthentication:
    def test_success_returns_client(self, token_config) -> None:
        seen: list[httpx.Request] = []
        checker = BlackDuckConnectivityChecker(transport=make_transport(seen=seen))

        result = checker.determine_connectivity(token_config)

        assert result.success is True
        assert isinstance(result.client, BlackDuckClient)
        assert result.client.server_version == "2020.4.0"
        assert result.server_config is token_config
        assert seen[0].headers["Authorization"] == "token api-token"
        assert seen[1].headers["Authorization"] == "Bearer bearer-123"
        result.client.close()

    def test_rejected_token_is_failure(self, token_config) -> None:
        checker = BlackDuckConnectivityChecker(transport=make_transport(auth_status=401))

        result = checker.determine_connectivity(token_config)

        assert result.success is False
        assert "401" in result.failure_message

    def test_missing_bearer_token_is_failure(self, token_config) -> None:
        checker = BlackDuckConnectivityChecker(
            transport=make_transport(auth_json={"unexpected": True})
        )

        result = checker.determine_connectivity(token_config)

        assert result.success is False
        assert "bearer token" in result.failure_message

    def test_version_error_is_failure(self, token_config) -> None:
        checker = BlackDuckConnectivityChecker(transport=make_transport(version_status=503))

        result = checker.determine_connectivity(token_config)

        assert result.success is False
        assert "503" in result.failure_message

    def test_transport_error_is_failure(self, token_config) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        checker = BlackDuckConnectivityChecker(transport=httpx.MockTransport(handler))

        result = checker.determine_connectivity(token_config)

        assert result.success is False
        assert "Could not reach Black Duck" in result.failure_message


class TestCredentialAuthentication:
    def test_username_password(self) -> None:
        seen: list[httpx.Request] = []
        checker = BlackDuckConnectivityChecker(transport=make_transport(seen=seen))
        config = BlackDuckServerConfig(url=URL, username="sysadmin", password="pw")

        result = checker.determine_connectivity(config)

        assert result.success is True
        assert seen[0].url.path == "/j_spring_security_check"
        assert b"j_username=sysadmin" in seen[0].content
        result.client.close()

    def test_no_credentials_is_failure_without_request(self) -> None:
        seen: list[httpx.Request] = []
        checker = BlackDuckConnectivityChecker(transport=make_transport(seen=seen))

        result = checker.determine_connectivity(BlackDuckServerConfig(url=URL))

        assert result.success is False
        assert "credentials" in result.failure_message
        assert seen == []
