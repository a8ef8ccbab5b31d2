"""Tests for nodefeatures.sources._network — SR-IOV detection."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from nodefeatures.sources import NetworkSource, SourceError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _add_iface(root, name: str, total=None, configured=None) -> None:
    """Create <root>/class/net/<name>/device with optional SR-IOV attributes."""
    device = root / "class" / "net" / name / "device"
    device.mkdir(parents=True)
    if total is not None:
        (device / "sriov_totalvfs").write_text(str(total))
    if configured is not None:
        (device / "sriov_numvfs").write_text(str(configured))


def _stats(isup: bool = True, flags: str = "up,broadcast,running,multicast"):
    return SimpleNamespace(isup=isup, flags=flags)


def _mock_psutil(stats: dict | None = None, error: Exception | None = None) -> MagicMock:
    mock = MagicMock()
    if error is not None:
        mock.net_if_stats.side_effect = error
    else:
        mock.net_if_stats.return_value = stats or {}
    return mock


@pytest.fixture
def sysfs(tmp_path):
    """Interfaces A (total=0), B (total=4, configured=0), C (total=8, configured=2)."""
    _add_iface(tmp_path, "ethA", total="0\n", configured="0\n")
    _add_iface(tmp_path, "ethB", total="4\n", configured="0\n")
    _add_iface(tmp_path, "ethC", total="8\n", configured="2\n")
    return tmp_path


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestNetworkSourceInit:
    def test_name(self) -> None:
        assert NetworkSource().name == "network"

    def test_default_roots_per_mode(self) -> None:
        assert NetworkSource(mode="host").sysfs_root == "/sys"
        assert NetworkSource(mode="mounted").sysfs_root == "/hostsys"

    def test_unknown_mode_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown network mode"):
            NetworkSource(mode="bogus")


# ---------------------------------------------------------------------------
# mounted mode (sum policy)
# ---------------------------------------------------------------------------


class TestMountedMode:
    def test_present_and_configured(self, sysfs) -> None:
        source = NetworkSource(mode="mounted", sysfs_root=str(sysfs))
        assert source.discover() == ["sriov", "sriov-configured"]

    def test_capable_but_unconfigured(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth0", total=4, configured=0)
        source = NetworkSource(mode="mounted", sysfs_root=str(tmp_path))
        assert source.discover() == ["sriov"]

    def test_configured_vfs_summed_across_interfaces(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth0", total=4, configured=1)
        _add_iface(tmp_path, "eth1", total=4, configured=3)
        source = NetworkSource(mode="mounted", sysfs_root=str(tmp_path))
        assert source.discover() == ["sriov", "sriov-configured"]

    def test_no_sriov_interfaces(self, tmp_path) -> None:
        _add_iface(tmp_path, "lo")
        _add_iface(tmp_path, "eth0", total=0)
        source = NetworkSource(mode="mounted", sysfs_root=str(tmp_path))
        assert source.discover() == []

    def test_unreadable_and_non_numeric_attributes_skipped(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth0")
        _add_iface(tmp_path, "eth1", total="")
        _add_iface(tmp_path, "eth2", total="abc")
        _add_iface(tmp_path, "eth3", total="-4")
        _add_iface(tmp_path, "eth4", total="8", configured="2")
        source = NetworkSource(mode="mounted", sysfs_root=str(tmp_path))
        assert source.discover() == ["sriov", "sriov-configured"]

    def test_non_numeric_configured_counts_as_zero(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth0", total=8, configured="n/a")
        source = NetworkSource(mode="mounted", sysfs_root=str(tmp_path))
        assert source.discover() == ["sriov"]

    def test_missing_net_directory_raises(self, tmp_path) -> None:
        source = NetworkSource(mode="mounted", sysfs_root=str(tmp_path))
        with pytest.raises(SourceError, match="network interfaces"):
            source.discover()

    def test_repeated_calls_identical(self, sysfs) -> None:
        source = NetworkSource(mode="mounted", sysfs_root=str(sysfs))
        assert source.discover() == source.discover()


# ---------------------------------------------------------------------------
# host mode (first-match policy)
# ---------------------------------------------------------------------------


class TestHostMode:
    def test_present_and_configured(self, sysfs) -> None:
        stats = {"ethA": _stats(), "ethB": _stats(), "ethC": _stats()}
        with patch.dict("sys.modules", {"psutil": _mock_psutil(stats)}):
            result = NetworkSource(mode="host", sysfs_root=str(sysfs)).discover()
        assert result == ["sriov", "sriov-configured"]

    def test_present_token_emitted_once(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth0", total=4, configured=0)
        _add_iface(tmp_path, "eth1", total=4, configured=0)
        stats = {"eth0": _stats(), "eth1": _stats()}
        with patch.dict("sys.modules", {"psutil": _mock_psutil(stats)}):
            result = NetworkSource(mode="host", sysfs_root=str(tmp_path)).discover()
        assert result == ["sriov"]

    def test_stops_at_first_configured_interface(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth0", total=4, configured=2)
        _add_iface(tmp_path, "eth1", total=4, configured=1)
        stats = {"eth0": _stats(), "eth1": _stats()}
        source = NetworkSource(mode="host", sysfs_root=str(tmp_path))
        with patch.dict("sys.modules", {"psutil": _mock_psutil(stats)}):
            with patch.object(
                source, "_configured_vfs", wraps=source._configured_vfs
            ) as spy:
                result = source.discover()
        assert result == ["sriov", "sriov-configured"]
        spy.assert_called_once_with("eth0")

    def test_down_and_loopback_interfaces_ignored(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth0", total=8, configured=2)
        _add_iface(tmp_path, "lo0", total=8, configured=2)
        stats = {
            "eth0": _stats(isup=False),
            "lo0": _stats(flags="up,loopback,running"),
        }
        with patch.dict("sys.modules", {"psutil": _mock_psutil(stats)}):
            result = NetworkSource(mode="host", sysfs_root=str(tmp_path)).discover()
        assert result == []

    def test_interface_without_sysfs_device_skipped(self, tmp_path) -> None:
        _add_iface(tmp_path, "eth1", total=8, configured=0)
        stats = {"docker0": _stats(), "eth1": _stats()}
        with patch.dict("sys.modules", {"psutil": _mock_psutil(stats)}):
            result = NetworkSource(mode="host", sysfs_root=str(tmp_path)).discover()
        assert result == ["sriov"]

    def test_enumeration_failure_raises(self, tmp_path) -> None:
        mock = _mock_psutil(error=OSError("netlink unavailable"))
        with patch.dict("sys.modules", {"psutil": mock}):
            with pytest.raises(SourceError, match="netlink unavailable"):
                NetworkSource(mode="host", sysfs_root=str(tmp_path)).discover()
