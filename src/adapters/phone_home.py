"""
Phone home adapter.

Implements ProductBootFactoryPort. Creates a PhoneHomeManager for the
active platforms unless usage reporting is disabled, either locally or by
the Black Duck analytics integration setting.

Event transport is not implemented; events are recorded and logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.adapters.analytics import AnalyticsConfigurationService, AnalyticsFetchError
from src.adapters.blackduck import BlackDuckClient
from src.components.product_boot.models import Platform, ProductRunData
from src.components.product_boot.ports import PhoneHomeManagerPort, ProductBootFactoryPort

logger = logging.getLogger(__name__)


@dataclass
class PhoneHomeManager:
    """Records usage events for the platforms active in this run."""

    platforms: tuple[Platform, ...]
    events: list[tuple[str, dict[str, str]]] = field(default_factory=list)

    def phone_home(self, event: str, metadata: dict[str, str] | None = None) -> None:
        payload = {"platforms": ",".join(p.value for p in self.platforms)}
        payload.update(metadata or {})
        self.events.append((event, payload))
        logger.debug("Phone home event %s: %s", event, payload)


@dataclass
class DefaultProductBootFactory:
    """Builds the side-channel objects needed after a successful boot."""

    phone_home_enabled: bool = True
    analytics_service: AnalyticsConfigurationService = field(
        default_factory=AnalyticsConfigurationService
    )

    def _analytics_allowed(self, run_data: ProductRunData) -> bool:
        blackduck = run_data.for_platform(Platform.BLACKDUCK)
        if not blackduck.active or not isinstance(blackduck.client, BlackDuckClient):
            return True

        try:
            setting = self.analytics_service.fetch_analytics_setting(blackduck.client)
        except AnalyticsFetchError as e:
            logger.warning("Unable to read the Black Duck analytics setting: %s", e)
            return False
        return setting.value

    def create_phone_home_manager(self, run_data: ProductRunData) -> PhoneHomeManager | None:
        if not self.phone_home_enabled:
            logger.debug("Phone home is disabled by configuration.")
            return None

        if not self._analytics_allowed(run_data):
            logger.debug("Phone home is disabled by the Black Duck analytics setting.")
            return None

        manager = PhoneHomeManager(platforms=run_data.active_platforms)
        manager.phone_home("boot")
        return manager


# Verify protocol compliance at module load time
def _verify_protocol_compliance() -> None:
    """Verify the factory and manager satisfy their ports."""
    factory: ProductBootFactoryPort = DefaultProductBootFactory()
    manager: PhoneHomeManagerPort = PhoneHomeManager(platforms=())
    _ = factory, manager


_verify_protocol_compliance()
