"""Intel P-state features (turbo boost) from sysfs."""

from __future__ import annotations

import logging
import os
from typing import Optional

from ._base import FeatureSource, SourceError

_logger = logging.getLogger(__name__)

NO_TURBO_PATH = os.path.join("devices", "system", "cpu", "intel_pstate", "no_turbo")


class PStateSource(FeatureSource):
    def __init__(
        self,
        sysfs_root: str = "/sys",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.sysfs_root = sysfs_root
        self._log = logger or _logger

    @property
    def name(self) -> str:
        return "pstate"

    @property
    def no_turbo_path(self) -> str:
        return os.path.join(self.sysfs_root, NO_TURBO_PATH)

    def discover(self) -> list[str]:
        # Only turbo boost for now.
        try:
            with open(self.no_turbo_path, "rb") as f:
                data = f.read()
        except OSError as exc:
            raise SourceError(
                self.name, f"can't detect whether turbo boost is enabled: {exc}"
            ) from exc

        if not data:
            raise SourceError(self.name, f"{self.no_turbo_path} is empty")

        if data[:1] == b"0":
            return ["turbo"]
        self._log.debug("pstate: turbo boost disabled (no_turbo=%r)", data.strip())
        return []
