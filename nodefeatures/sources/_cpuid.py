"""CPU instruction-set features via py-cpuinfo."""

from __future__ import annotations

import logging
from typing import Optional

from ._base import FeatureSource, SourceError

_logger = logging.getLogger(__name__)


class CPUIDSource(FeatureSource):
    """Reports CPUID feature flags under the "cpuid" key.

    Source keys name the probing mechanism for CPU flags ("cpuid") and the
    subsystem for the other probes ("rdt", "pstate", "network").
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or _logger

    @property
    def name(self) -> str:
        return "cpuid"

    def discover(self) -> list[str]:
        """Return the supported CPU feature flags, upper-cased."""
        import cpuinfo

        try:
            info = cpuinfo.get_cpu_info()
        except Exception as exc:
            raise SourceError(self.name, f"can't query CPU features: {exc}") from exc

        flags = info.get("flags")
        if flags is None:
            raise SourceError(self.name, "CPU feature flags not reported")

        features = sorted({str(flag).upper() for flag in flags if flag})
        self._log.debug("cpuid: %d CPU flags", len(features))
        return features
