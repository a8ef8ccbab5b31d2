"""Node feature sources.

Each source probes one hardware subsystem and returns feature names;
:class:`FeatureDiscovery` runs them all and merges the results.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ._base import FeatureSource, SourceError
from ._cpuid import CPUIDSource
from ._discovery import DiscoveryError, FeatureDiscovery, discover_features
from ._network import NetworkSource
from ._pstate import PStateSource
from ._rdt import RDTSource
from ._types import DiscoveryResult

if TYPE_CHECKING:
    from ..config import DiscoveryConfig


def build_sources(
    config: Optional["DiscoveryConfig"] = None,
    logger: Optional[logging.Logger] = None,
) -> list[FeatureSource]:
    """Build the enabled sources in canonical order."""
    from ..config import SOURCE_NAMES, DiscoveryConfig

    if config is None:
        config = DiscoveryConfig.from_env()

    # pstate always reads the node's own /sys unless a root is given
    sysfs_root = config.sysfs_root or "/sys"
    factories = {
        "cpuid": lambda: CPUIDSource(logger=logger),
        "rdt": lambda: RDTSource(
            rdt_bin=config.rdt_bin, timeout=config.helper_timeout, logger=logger
        ),
        "pstate": lambda: PStateSource(sysfs_root=sysfs_root, logger=logger),
        "network": lambda: NetworkSource(
            mode=config.network_mode,
            sysfs_root=config.resolved_sysfs_root,
            logger=logger,
        ),
    }
    return [factories[name]() for name in SOURCE_NAMES if name in config.sources]


__all__ = [
    "CPUIDSource",
    "DiscoveryError",
    "DiscoveryResult",
    "FeatureDiscovery",
    "FeatureSource",
    "NetworkSource",
    "PStateSource",
    "RDTSource",
    "SourceError",
    "build_sources",
    "discover_features",
]
