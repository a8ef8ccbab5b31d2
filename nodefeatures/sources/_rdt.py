"""Intel RDT (Resource Director Technology) detection via helper scripts."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Optional

from ._base import FeatureSource, SourceError

_logger = logging.getLogger(__name__)

DEFAULT_RDT_BIN = (
    "/go/src/github.com/kubernetes-incubator/node-feature-discovery/rdt-discovery"
)
DEFAULT_HELPER_TIMEOUT = 10.0

# (helper script, feature, description) in report order
_RDT_HELPERS: list[tuple[str, str, str]] = [
    ("mon-discovery", "RDTMON", "RDT monitoring"),
    ("l3-alloc-discovery", "RDTL3CA", "RDT L3 allocation"),
    ("l2-alloc-discovery", "RDTL2CA", "RDT L2 allocation"),
]


class RDTSource(FeatureSource):
    """Reports CMT and CAT support as detected by the RDT helper programs.

    Each helper is run through ``bash -c`` and only its exit status is
    consulted: zero means the capability is present.
    """

    def __init__(
        self,
        rdt_bin: str = DEFAULT_RDT_BIN,
        timeout: float = DEFAULT_HELPER_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.rdt_bin = rdt_bin
        self.timeout = timeout
        self._log = logger or _logger

    @property
    def name(self) -> str:
        return "rdt"

    def discover(self) -> list[str]:
        if not os.path.isdir(self.rdt_bin):
            raise SourceError(
                self.name, f"RDT helper directory {self.rdt_bin} not found"
            )

        features: list[str] = []
        for helper, feature, description in _RDT_HELPERS:
            if self._run_helper(helper, description):
                features.append(feature)
        return features

    def _run_helper(self, helper: str, description: str) -> bool:
        """Run one helper, returning True when it exits with status 0."""
        path = os.path.join(self.rdt_bin, helper)
        try:
            result = subprocess.run(
                ["bash", "-c", path],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            self._log.debug(
                "support for %s was not detected: %s timed out after %ss",
                description,
                helper,
                self.timeout,
            )
            return False
        except OSError as exc:
            self._log.debug("support for %s was not detected: %s", description, exc)
            return False

        if result.returncode != 0:
            self._log.debug(
                "support for %s was not detected: exit status %d %s",
                description,
                result.returncode,
                (result.stderr or "").strip(),
            )
            return False
        return True
