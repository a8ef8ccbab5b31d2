"""SR-IOV network virtualization detection from sysfs."""

from __future__ import annotations

import logging
import os
from typing import Optional

from ._base import FeatureSource, SourceError

_logger = logging.getLogger(__name__)

MODE_HOST = "host"
MODE_MOUNTED = "mounted"
NETWORK_MODES = (MODE_HOST, MODE_MOUNTED)

# Default sysfs root per mode; "mounted" expects the node's /sys at /hostsys.
DEFAULT_SYSFS_ROOTS: dict[str, str] = {
    MODE_HOST: "/sys",
    MODE_MOUNTED: "/hostsys",
}

FEATURE_SRIOV = "sriov"
FEATURE_SRIOV_CONFIGURED = "sriov-configured"


class NetworkSource(FeatureSource):
    """Reports SR-IOV capability and configuration of network interfaces.

    Two modes with different aggregation policies:

    ``host``
        Interfaces come from ``psutil.net_if_stats()``; down and loopback
        interfaces are ignored.  Scanning stops at the first interface with
        configured virtual functions.
    ``mounted``
        Interfaces are the entries of ``<sysfs_root>/class/net``.  Configured
        virtual functions are summed over all interfaces and
        ``sriov-configured`` is reported when the total is positive.
    """

    def __init__(
        self,
        mode: str = MODE_HOST,
        sysfs_root: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if mode not in NETWORK_MODES:
            raise ValueError(
                f"unknown network mode {mode!r}, expected one of {NETWORK_MODES}"
            )
        self.mode = mode
        self.sysfs_root = sysfs_root or DEFAULT_SYSFS_ROOTS[mode]
        self._log = logger or _logger

    @property
    def name(self) -> str:
        return "network"

    def discover(self) -> list[str]:
        if self.mode == MODE_HOST:
            return self._discover_first_match(self._host_interfaces())
        return self._discover_total(self._mounted_interfaces())

    # ------------------------------------------------------------------
    # Interface enumeration
    # ------------------------------------------------------------------

    def _host_interfaces(self) -> list[str]:
        import psutil

        try:
            stats = psutil.net_if_stats()
        except Exception as exc:
            raise SourceError(
                self.name, f"can't obtain the network interfaces: {exc}"
            ) from exc

        interfaces = []
        for iface, st in stats.items():
            if not st.isup:
                continue
            flags = getattr(st, "flags", "") or ""
            if iface == "lo" or "loopback" in flags.split(","):
                continue
            interfaces.append(iface)
        return sorted(interfaces)

    def _mounted_interfaces(self) -> list[str]:
        net_dir = os.path.join(self.sysfs_root, "class", "net")
        try:
            return sorted(os.listdir(net_dir))
        except OSError as exc:
            raise SourceError(
                self.name, f"can't obtain the network interfaces: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Aggregation policies
    # ------------------------------------------------------------------

    def _discover_first_match(self, interfaces: list[str]) -> list[str]:
        features: list[str] = []
        for iface in interfaces:
            configured = self._configured_vfs(iface)
            if configured is None:
                continue
            if FEATURE_SRIOV not in features:
                features.append(FEATURE_SRIOV)
            if configured > 0:
                features.append(FEATURE_SRIOV_CONFIGURED)
                break
        return features

    def _discover_total(self, interfaces: list[str]) -> list[str]:
        features: list[str] = []
        total_vfs = 0
        for iface in interfaces:
            configured = self._configured_vfs(iface)
            if configured is None:
                continue
            if FEATURE_SRIOV not in features:
                features.append(FEATURE_SRIOV)
            total_vfs += configured
        if total_vfs > 0:
            features.append(FEATURE_SRIOV_CONFIGURED)
        return features

    # ------------------------------------------------------------------
    # sysfs attributes
    # ------------------------------------------------------------------

    def _configured_vfs(self, iface: str) -> Optional[int]:
        """Configured VF count for an SR-IOV capable interface, else None."""
        total = self._read_int(iface, "sriov_totalvfs")
        if total is None or total == 0:
            self._log.debug("network: %s does not support SR-IOV", iface)
            return None
        configured = self._read_int(iface, "sriov_numvfs") or 0
        self._log.debug(
            "network: %s supports %d VFs, %d configured", iface, total, configured
        )
        return configured

    def _read_int(self, iface: str, attr: str) -> Optional[int]:
        path = os.path.join(self.sysfs_root, "class", "net", iface, "device", attr)
        try:
            with open(path, "rb") as f:
                raw = f.read().strip()
        except OSError:
            return None
        if not raw or not raw.isdigit():
            self._log.debug("network: ignoring non-numeric %s=%r", path, raw)
            return None
        return int(raw)
