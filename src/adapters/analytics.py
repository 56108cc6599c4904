"""
Black Duck integration settings adapter.

Reads the analytics integration setting, which controls whether usage
reporting is allowed for this server.
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, ValidationError

from src.adapters.blackduck import BlackDuckClient

INTEGRATION_SETTINGS_PATH = "/api/internal/integration-settings"
MIME_TYPE = "application/vnd.blackducksoftware.integration-setting-1+json"


class AnalyticsSetting(BaseModel):
    name: str | None = None
    value: bool


class AnalyticsFetchError(Exception):
    """Raised when the analytics setting cannot be read."""


class AnalyticsConfigurationService:
    def fetch_analytics_setting(self, client: BlackDuckClient) -> AnalyticsSetting:
        """
        Fetch the analytics integration setting.

        Raises AnalyticsFetchError on HTTP errors or an unexpected payload.
        """
        path = f"{INTEGRATION_SETTINGS_PATH}/analytics"
        try:
            response = client.get(path, accept=MIME_TYPE)
            response.raise_for_status()
            return AnalyticsSetting.model_validate_json(response.content)
        except httpx.HTTPStatusError as e:
            raise AnalyticsFetchError(
                f"Analytics setting request failed: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise AnalyticsFetchError(f"Analytics setting request failed: {e}") from e
        except ValidationError as e:
            raise AnalyticsFetchError(f"Invalid analytics setting:\n{e}") from e
