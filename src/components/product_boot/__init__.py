"""Product boot component.

Decides which external platforms (Black Duck, Polaris) this run will use,
based on operator intent and a live connectivity probe for each.
"""

from .component import PlatformEntry, boot, build_entries, run, run_boot
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
from .ports import ConnectivityCheckerPort, PhoneHomeManagerPort, ProductBootFactoryPort

__all__ = [
    # Entry points
    "run",
    "run_boot",
    "boot",
    "build_entries",
    "PlatformEntry",
    # Models
    "BootError",
    "ConnectivityResult",
    "Platform",
    "PlatformDecision",
    "PlatformRunData",
    "ProductBootError",
    "ProductBootOptions",
    "ProductBootOutput",
    "ProductDecision",
    "ProductRunData",
    # Ports
    "ConnectivityCheckerPort",
    "PhoneHomeManagerPort",
    "ProductBootFactoryPort",
]
