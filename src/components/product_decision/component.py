"""
Product decision component - Operator intent from configuration.

Turns the loaded configuration into one skip/run-online decision per
platform, plus the global boot options.
"""

from __future__ import annotations

import logging

from src.components.product_boot.models import (
    Platform,
    PlatformDecision,
    ProductBootOptions,
    ProductDecision,
)
from src.config.models import BlackDuckSettings, DetectConfig, PolarisSettings

from .models import BlackDuckServerConfig, PolarisServerConfig

logger = logging.getLogger(__name__)


def decide_blackduck(settings: BlackDuckSettings) -> PlatformDecision:
    if settings.offline_mode:
        return PlatformDecision.skip(Platform.BLACKDUCK, "Black Duck offline mode is enabled.")

    if not settings.url:
        return PlatformDecision.skip(Platform.BLACKDUCK, "No Black Duck url was provided.")

    config = BlackDuckServerConfig(
        url=settings.url.rstrip("/"),
        api_token=settings.api_token,
        username=settings.username,
        password=settings.password,
        timeout=settings.timeout,
        trust_cert=settings.trust_cert,
    )
    return PlatformDecision.online(
        Platform.BLACKDUCK, config, "A Black Duck url was provided."
    )


def decide_polaris(settings: PolarisSettings) -> PlatformDecision:
    if not settings.url:
        return PlatformDecision.skip(Platform.POLARIS, "No Polaris url was provided.")

    if not settings.access_token:
        return PlatformDecision.skip(
            Platform.POLARIS, "No Polaris access token was provided."
        )

    config = PolarisServerConfig(
        url=settings.url.rstrip("/"),
        access_token=settings.access_token,
        timeout=settings.timeout,
    )
    return PlatformDecision.online(
        Platform.POLARIS, config, "A Polaris url and access token were provided."
    )


def decide_products(config: DetectConfig) -> ProductDecision:
    """Decide which platforms the operator asked to run, in probe order."""
    decision = ProductDecision.of(
        decide_blackduck(config.blackduck),
        decide_polaris(config.polaris),
    )
    for d in decision.decisions:
        logger.debug(
            "%s decision: %s (%s)",
            d.platform.display_name,
            "run online" if d.run_online else "skip",
            d.reason,
        )
    return decision


def boot_options(config: DetectConfig) -> ProductBootOptions:
    return ProductBootOptions(
        ignore_connectivity_failures=config.detect.ignore_connection_failures,
        test_connections_only=config.detect.test_connection,
    )
