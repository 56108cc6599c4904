"""
Product boot component - Data models.

Frozen dataclasses for operator intent, probe results, boot options,
run data and boot outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from .ports import PhoneHomeManagerPort


class Platform(str, Enum):
    """External platforms the tool can report to."""

    BLACKDUCK = "blackduck"
    POLARIS = "polaris"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Platform.BLACKDUCK: "Black Duck",
    Platform.POLARIS: "Polaris",
}


# --- Operator Intent ---


@dataclass(frozen=True)
class PlatformDecision:
    """Operator intent for one platform: skip it or run it online."""

    platform: Platform
    run_online: bool
    config: Any = None
    reason: str = ""

    @classmethod
    def skip(cls, platform: Platform, reason: str = "") -> PlatformDecision:
        return cls(platform=platform, run_online=False, config=None, reason=reason)

    @classmethod
    def online(
        cls, platform: Platform, config: Any = None, reason: str = ""
    ) -> PlatformDecision:
        return cls(platform=platform, run_online=True, config=config, reason=reason)


@dataclass(frozen=True)
class ProductDecision:
    """Ordered per-platform decisions. Order is the probe order."""

    decisions: tuple[PlatformDecision, ...]

    @classmethod
    def of(cls, blackduck: PlatformDecision, polaris: PlatformDecision) -> ProductDecision:
        return cls(decisions=(blackduck, polaris))

    def for_platform(self, platform: Platform) -> PlatformDecision:
        for decision in self.decisions:
            if decision.platform == platform:
                return decision
        return PlatformDecision.skip(platform, "No decision recorded")

    @property
    def any_requested(self) -> bool:
        return any(d.run_online for d in self.decisions)


@dataclass(frozen=True)
class ProductBootOptions:
    """Global boot policy."""

    ignore_connectivity_failures: bool = False
    test_connections_only: bool = False


# --- Probe Results ---


@dataclass(frozen=True)
class ConnectivityResult:
    """Outcome of one live platform probe."""

    success: bool
    client: Any = None
    server_config: Any = None
    failure_message: str | None = None

    @classmethod
    def succeeded(cls, client: Any = None, server_config: Any = None) -> ConnectivityResult:
        return cls(success=True, client=client, server_config=server_config)

    @classmethod
    def failure(cls, message: str) -> ConnectivityResult:
        return cls(success=False, failure_message=message)


# --- Run Data ---


@dataclass(frozen=True)
class PlatformRunData:
    """Activation state of one platform for the run phase."""

    platform: Platform
    active: bool
    client: Any = None
    server_config: Any = None

    @classmethod
    def inactive(cls, platform: Platform) -> PlatformRunData:
        return cls(platform=platform, active=False)


@dataclass(frozen=True)
class ProductRunData:
    """Final activation state handed to the run phase."""

    platforms: tuple[PlatformRunData, ...]

    def for_platform(self, platform: Platform) -> PlatformRunData:
        for data in self.platforms:
            if data.platform == platform:
                return data
        return PlatformRunData.inactive(platform)

    def should_use(self, platform: Platform) -> bool:
        return self.for_platform(platform).active

    @property
    def should_use_blackduck(self) -> bool:
        return self.should_use(Platform.BLACKDUCK)

    @property
    def should_use_polaris(self) -> bool:
        return self.should_use(Platform.POLARIS)

    @property
    def active_platforms(self) -> tuple[Platform, ...]:
        return tuple(d.platform for d in self.platforms if d.active)


# --- Errors ---

BootErrorCode = Literal[
    "NO_PRODUCT_REQUESTED",
    "CONNECTIVITY_FAILURE",
    "TEST_MODE_CONNECTIVITY_FAILURE",
]


@dataclass(frozen=True)
class BootError:
    """Why a boot cannot proceed."""

    code: BootErrorCode
    message: str
    platform: Platform | None = None


class ProductBootError(Exception):
    """User-facing fatal boot error."""

    def __init__(self, error: BootError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def code(self) -> BootErrorCode:
        return self.error.code


# --- Output ---


@dataclass(frozen=True)
class ProductBootOutput:
    """Result of a boot: ready with run data, connection tested, or failed."""

    run_data: ProductRunData | None
    error: BootError | None
    success: bool
    connection_tested: bool
    phone_home_manager: PhoneHomeManagerPort | None = None

    @classmethod
    def ready(
        cls,
        run_data: ProductRunData,
        phone_home_manager: PhoneHomeManagerPort | None = None,
    ) -> ProductBootOutput:
        """Create a result that proceeds to the run phase."""
        return cls(
            run_data=run_data,
            error=None,
            success=True,
            connection_tested=False,
            phone_home_manager=phone_home_manager,
        )

    @classmethod
    def tested(cls) -> ProductBootOutput:
        """Create a result for a passed connection test (no run phase)."""
        return cls(
            run_data=None,
            error=None,
            success=True,
            connection_tested=True,
        )

    @classmethod
    def failed(cls, error: BootError) -> ProductBootOutput:
        """Create a failure result."""
        return cls(
            run_data=None,
            error=error,
            success=False,
            connection_tested=False,
        )
