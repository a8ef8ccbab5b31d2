"""node-features: discover hardware capabilities of a compute node as feature labels."""

from __future__ import annotations

from .config import ConfigError, DiscoveryConfig
from .sources import (
    DiscoveryError,
    DiscoveryResult,
    FeatureDiscovery,
    FeatureSource,
    SourceError,
    build_sources,
    discover_features,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DiscoveryConfig",
    "DiscoveryError",
    "DiscoveryResult",
    "FeatureDiscovery",
    "FeatureSource",
    "SourceError",
    "build_sources",
    "discover_features",
]
