"""
Black Duck connectivity adapter.

Implements ConnectivityCheckerPort for Black Duck: authenticates with an
API token (or username/password) and confirms access by reading the
server version.

Key behaviors:
- Transport errors and non-2xx responses become failure results
- A successful probe hands over an authenticated BlackDuckClient
- Secrets are never logged
"""

from __future__ import annotations

import logging

import httpx

from src.components.product_boot.models import ConnectivityResult
from src.components.product_boot.ports import ConnectivityCheckerPort
from src.components.product_decision.models import BlackDuckServerConfig

logger = logging.getLogger(__name__)

TOKEN_AUTH_PATH = "/api/tokens/authenticate"
CREDENTIALS_AUTH_PATH = "/j_spring_security_check"
CURRENT_VERSION_PATH = "/api/current-version"


class BlackDuckAuthError(Exception):
    """Raised when Black Duck rejects or mangles an authentication attempt."""


class BlackDuckClient:
    """Authenticated HTTP handle to a Black Duck server."""

    def __init__(self, http: httpx.Client, server_version: str | None = None) -> None:
        self.http = http
        self.server_version = server_version

    @property
    def base_url(self) -> str:
        return str(self.http.base_url).rstrip("/")

    def get(self, path: str, accept: str | None = None) -> httpx.Response:
        headers = {"Accept": accept} if accept else None
        return self.http.get(path, headers=headers)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> BlackDuckClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()


class BlackDuckConnectivityChecker:
    """Probe a Black Duck server and return an authenticated client on success."""

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def _create_http(self, config: BlackDuckServerConfig) -> httpx.Client:
        return httpx.Client(
            base_url=config.url,
            timeout=float(config.timeout),
            verify=not config.trust_cert,
            transport=self._transport,
        )

    def _authenticate(self, http: httpx.Client, config: BlackDuckServerConfig) -> None:
        if config.uses_api_token:
            response = http.post(
                TOKEN_AUTH_PATH,
                headers={"Authorization": f"token {config.api_token}"},
            )
            response.raise_for_status()
            try:
                bearer = response.json()["bearerToken"]
            except (ValueError, KeyError, TypeError) as e:
                raise BlackDuckAuthError(
                    "Black Duck did not return a bearer token."
                ) from e
            http.headers["Authorization"] = f"Bearer {bearer}"
            return

        response = http.post(
            CREDENTIALS_AUTH_PATH,
            data={"j_username": config.username, "j_password": config.password},
        )
        response.raise_for_status()

    def determine_connectivity(self, config: BlackDuckServerConfig) -> ConnectivityResult:
        """
        Authenticate against Black Duck and read its version.

        Args:
            config: Server url, credentials and timeout

        Returns:
            ConnectivityResult with a BlackDuckClient on success, or a failure message
        """
        if not config.has_credentials:
            return ConnectivityResult.failure(
                "No Black Duck credentials were provided. "
                "Set an API token or a username and password."
            )

        logger.debug("Attempting connection to Black Duck at %s", config.url)
        http = self._create_http(config)

        try:
            self._authenticate(http, config)
            response = http.get(CURRENT_VERSION_PATH)
            response.raise_for_status()
            version = response.json().get("version")
        except httpx.HTTPStatusError as e:
            http.close()
            return ConnectivityResult.failure(
                f"Black Duck responded with HTTP {e.response.status_code} "
                f"for {e.request.url.path}"
            )
        except httpx.HTTPError as e:
            http.close()
            return ConnectivityResult.failure(f"Could not reach Black Duck at {config.url}: {e}")
        except (BlackDuckAuthError, ValueError, AttributeError) as e:
            http.close()
            return ConnectivityResult.failure(str(e) or "Unexpected Black Duck response")

        logger.info("Connected to Black Duck version %s", version or "unknown")
        return ConnectivityResult.succeeded(BlackDuckClient(http, version), config)


# Verify protocol compliance at module load time
def _verify_protocol_compliance() -> None:
    """Verify BlackDuckConnectivityChecker satisfies ConnectivityCheckerPort."""
    checker: ConnectivityCheckerPort = BlackDuckConnectivityChecker()
    _ = checker


_verify_protocol_compliance()
