"""Run every feature source and merge the results into one report."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Iterable, Optional

from ._base import FeatureSource
from ._types import DiscoveryResult

if TYPE_CHECKING:
    from ..config import DiscoveryConfig

_logger = logging.getLogger(__name__)


class DiscoveryError(RuntimeError):
    """Every registered source failed."""

    def __init__(self, result: DiscoveryResult) -> None:
        reasons = "; ".join(f"{name}: {err}" for name, err in result.errors.items())
        super().__init__(f"all feature sources failed ({reasons})")
        self.result = result


class FeatureDiscovery:
    """Drives an ordered set of sources, isolating per-source failure."""

    def __init__(
        self,
        sources: Iterable[FeatureSource],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or _logger
        self._sources: list[FeatureSource] = []
        for source in sources:
            self.register(source)

    def register(self, source: FeatureSource) -> None:
        for existing in self._sources:
            if existing.name == source.name:
                self._log.warning(
                    "duplicate feature source %r ignored, keeping %r",
                    source,
                    existing,
                )
                return
        self._sources.append(source)

    @property
    def sources(self) -> list[FeatureSource]:
        return list(self._sources)

    def discover(self) -> DiscoveryResult:
        """Run one discovery pass over all sources, in registration order."""
        result = DiscoveryResult()
        for source in self._sources:
            name = source.name
            try:
                features = list(source.discover())
            except Exception as exc:
                self._log.warning("discovery failed for source %s: %s", name, exc)
                result.errors[name] = str(exc)
                result.diagnostics.append(f"{name}: discovery failed: {exc}")
                continue
            self._log.debug("source %s discovered %d features", name, len(features))
            result.features[name] = features
            result.diagnostics.append(f"{name}: {len(features)} features")

        result.timestamp = time.time()
        self._log.info(
            "discovery pass finished: %d ok, %d failed",
            len(result.features),
            len(result.errors),
        )
        if self._sources and not result.features:
            raise DiscoveryError(result)
        return result


def discover_features(
    sources: Optional[Iterable[FeatureSource]] = None,
    config: Optional["DiscoveryConfig"] = None,
) -> dict[str, list[str]]:
    """One-liner API: run a discovery pass and return the feature report."""
    if sources is None:
        from . import build_sources

        sources = build_sources(config)
    return FeatureDiscovery(sources).discover().features
