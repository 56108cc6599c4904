"""Product boot component port definitions.

Protocol interfaces for external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import ConnectivityResult, ProductRunData


class ConnectivityCheckerPort(Protocol):
    """Live reachability and credential probe for one platform."""

    def determine_connectivity(self, config: Any) -> ConnectivityResult:
        """Probe the platform. Ordinary failures are returned, not raised."""
        ...


class PhoneHomeManagerPort(Protocol):
    """Usage reporting handle created after a successful boot."""

    def phone_home(self, event: str, metadata: dict[str, str] | None = None) -> None:
        """Record a usage event."""
        ...


class ProductBootFactoryPort(Protocol):
    """Factory for side-channel objects created on a successful boot."""

    def create_phone_home_manager(
        self, run_data: ProductRunData
    ) -> PhoneHomeManagerPort | None:
        """Create a phone home manager for the active platforms, if enabled."""
        ...
