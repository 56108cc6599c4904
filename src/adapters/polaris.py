"""
Polaris connectivity adapter.

Implements ConnectivityCheckerPort for Polaris by exchanging the access
token for a JWT.
"""

from __future__ import annotations

import logging

import httpx

from src.components.product_boot.models import ConnectivityResult
from src.components.product_decision.models import PolarisServerConfig

logger = logging.getLogger(__name__)

AUTHENTICATE_PATH = "/api/auth/authenticate"


class PolarisClient:
    """Authenticated HTTP handle to a Polaris instance."""

    def __init__(self, http: httpx.Client) -> None:
        self.http = http

    def close(self) -> None:
        self.http.close()


class PolarisConnectivityChecker:
    """Probe a Polaris instance and return an authenticated client on success."""

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def determine_connectivity(self, config: PolarisServerConfig) -> ConnectivityResult:
        logger.debug("Attempting connection to Polaris at %s", config.url)
        http = httpx.Client(
            base_url=config.url,
            timeout=float(config.timeout),
            transport=self._transport,
        )

        try:
            response = http.post(AUTHENTICATE_PATH, data={"accesstoken": config.access_token})
            response.raise_for_status()
            jwt = response.json()["jwt"]
        except httpx.HTTPStatusError as e:
            http.close()
            return ConnectivityResult.failure(
                f"Polaris responded with HTTP {e.response.status_code} during authentication"
            )
        except httpx.HTTPError as e:
            http.close()
            return ConnectivityResult.failure(f"Could not reach Polaris at {config.url}: {e}")
        except (ValueError, KeyError, TypeError):
            http.close()
            return ConnectivityResult.failure("Polaris did not return an access token.")

        http.headers["Authorization"] = f"Bearer {jwt}"
        logger.info("Connected to Polaris at %s", config.url)
        return ConnectivityResult.succeeded(PolarisClient(http), config)
