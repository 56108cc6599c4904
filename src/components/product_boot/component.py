"""Product boot component implementation.

Decides, per platform, whether this run will talk to it. Skipped platforms
are never probed; requested platforms are probed in order and the results
are folded with the boot options into run data.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .models import (
    BootError,
    ConnectivityResult,
    Platform,
    PlatformDecision,
    PlatformRunData,
    ProductBootError,
    ProductBootOptions,
    ProductBootOutput,
    ProductDecision,
    ProductRunData,
)
from .ports import ConnectivityCheckerPort, ProductBootFactoryPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformEntry:
    """One platform to evaluate: its decision and the checker that probes it."""

    decision: PlatformDecision
    checker: ConnectivityCheckerPort | None

    @property
    def platform(self) -> Platform:
        return self.decision.platform


def build_entries(
    decision: ProductDecision,
    checkers: Mapping[Platform, ConnectivityCheckerPort],
) -> tuple[PlatformEntry, ...]:
    """Pair each decision with its platform's checker, keeping decision order."""
    return tuple(
        PlatformEntry(decision=d, checker=checkers.get(d.platform))
        for d in decision.decisions
    )


def _probe(entry: PlatformEntry) -> ConnectivityResult:
    if entry.checker is None:
        return ConnectivityResult.failure(
            f"No connectivity checker configured for {entry.platform.display_name}."
        )
    try:
        return entry.checker.determine_connectivity(entry.decision.config)
    except OSError as e:
        # Transport errors must not escape the boot.
        return ConnectivityResult.failure(str(e) or e.__class__.__name__)


def _release_clients(platform_data: Sequence[PlatformRunData]) -> None:
    """Close client handles that will not be handed to a run phase."""
    for data in platform_data:
        close = getattr(data.client, "close", None)
        if callable(close):
            close()


def _evaluate(
    entry: PlatformEntry,
    options: ProductBootOptions,
) -> PlatformRunData | BootError:
    """Evaluate a single platform. Returns its run data or a fatal error."""
    platform = entry.platform

    if not entry.decision.run_online:
        logger.debug(
            "%s will not be run: %s",
            platform.display_name,
            entry.decision.reason or "skipped",
        )
        return PlatformRunData.inactive(platform)

    logger.info("Checking connectivity to %s.", platform.display_name)
    result = _probe(entry)

    if result.success:
        logger.info("Connection to %s was successful.", platform.display_name)
        return PlatformRunData(
            platform=platform,
            active=True,
            client=result.client,
            server_config=result.server_config,
        )

    message = result.failure_message or "Unknown connectivity failure"

    if options.test_connections_only:
        return BootError(
            code="TEST_MODE_CONNECTIVITY_FAILURE",
            message=f"{platform.display_name} connection test failed: {message}",
            platform=platform,
        )

    if options.ignore_connectivity_failures:
        logger.warning(
            "Failed to connect to %s, it will not be run: %s",
            platform.display_name,
            message,
        )
        return PlatformRunData.inactive(platform)

    return BootError(
        code="CONNECTIVITY_FAILURE",
        message=f"Could not communicate with {platform.display_name}: {message}",
        platform=platform,
    )


def run_boot(
    entries: Sequence[PlatformEntry],
    options: ProductBootOptions,
    factory: ProductBootFactoryPort,
) -> ProductBootOutput:
    """Execute the product boot over an ordered list of platform entries.

    Args:
        entries: Platforms in probe order, each with its decision and checker.
        options: Global boot policy.
        factory: Creates the phone home manager on a successful run boot.

    Returns:
        ProductBootOutput that is ready, connection-tested, or failed.
    """
    # 1. Something must be requested
    if not any(e.decision.run_online for e in entries):
        error = BootError(
            code="NO_PRODUCT_REQUESTED",
            message=(
                "Your environment was not sufficiently configured to run "
                "Black Duck or Polaris. Please configure your environment "
                "for at least one product."
            ),
        )
        logger.error(error.message)
        return ProductBootOutput.failed(error)

    # 2. Evaluate each platform in order; the first fatal error stops the boot
    platform_data: list[PlatformRunData] = []
    for entry in entries:
        outcome = _evaluate(entry, options)
        if isinstance(outcome, BootError):
            logger.error(outcome.message)
            _release_clients(platform_data)
            return ProductBootOutput.failed(outcome)
        platform_data.append(outcome)

    # 3. Test mode stops here
    if options.test_connections_only:
        logger.info("All connectivity tests passed. Run phase will be skipped.")
        _release_clients(platform_data)
        return ProductBootOutput.tested()

    # 4. Build run data and side-channel objects
    run_data = ProductRunData(platforms=tuple(platform_data))
    phone_home_manager = factory.create_phone_home_manager(run_data)

    logger.info(
        "Product boot completed. Active platforms: %s",
        ", ".join(p.display_name for p in run_data.active_platforms) or "none",
    )
    return ProductBootOutput.ready(run_data, phone_home_manager)


def run(
    decision: ProductDecision,
    options: ProductBootOptions,
    checkers: Mapping[Platform, ConnectivityCheckerPort],
    factory: ProductBootFactoryPort,
) -> ProductBootOutput:
    """Main entry point for the product boot component.

    Args:
        decision: Per-platform operator intent.
        options: Global boot policy.
        checkers: Connectivity checker for each platform.
        factory: Side-channel object factory.

    Returns:
        ProductBootOutput with the result of the boot.
    """
    return run_boot(build_entries(decision, checkers), options, factory)


def boot(
    decision: ProductDecision,
    options: ProductBootOptions,
    blackduck_checker: ConnectivityCheckerPort,
    polaris_checker: ConnectivityCheckerPort,
    factory: ProductBootFactoryPort,
) -> ProductRunData | None:
    """Boot both products, raising on failure.

    Returns run data, or None when connectivity was only being tested.
    Raises ProductBootError when no run is possible.
    """
    output = run(
        decision,
        options,
        {Platform.BLACKDUCK: blackduck_checker, Platform.POLARIS: polaris_checker},
        factory,
    )
    if output.error is not None:
        raise ProductBootError(output.error)
    return output.run_data
