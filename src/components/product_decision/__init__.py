"""Product decision component.

Builds per-platform operator intent and boot options from configuration.
"""

from .component import boot_options, decide_blackduck, decide_polaris, decide_products
from .models import BlackDuckServerConfig, PolarisServerConfig

__all__ = [
    "boot_options",
    "decide_blackduck",
    "decide_polaris",
    "decide_products",
    "BlackDuckServerConfig",
    "PolarisServerConfig",
]
