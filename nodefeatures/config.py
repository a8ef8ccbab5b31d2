"""Discovery configuration.

Values fall back from explicit arguments to ``NFD_*`` environment variables
to built-in defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .sources._network import DEFAULT_SYSFS_ROOTS, MODE_HOST, NETWORK_MODES
from .sources._rdt import DEFAULT_HELPER_TIMEOUT, DEFAULT_RDT_BIN

SOURCE_NAMES: tuple[str, ...] = ("cpuid", "rdt", "pstate", "network")


class ConfigError(ValueError):
    pass


def _split_sources(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class DiscoveryConfig:
    sources: list[str] = field(default_factory=lambda: list(SOURCE_NAMES))
    rdt_bin: str = DEFAULT_RDT_BIN
    helper_timeout: float = DEFAULT_HELPER_TIMEOUT
    sysfs_root: Optional[str] = None  # None -> per-mode default
    network_mode: str = MODE_HOST

    def __post_init__(self) -> None:
        unknown = [s for s in self.sources if s not in SOURCE_NAMES]
        if unknown:
            raise ConfigError(
                f"unknown feature source(s) {', '.join(unknown)}; "
                f"available: {', '.join(SOURCE_NAMES)}"
            )
        if self.network_mode not in NETWORK_MODES:
            raise ConfigError(
                f"unknown network mode {self.network_mode!r}, "
                f"expected one of {', '.join(NETWORK_MODES)}"
            )
        if self.helper_timeout <= 0:
            raise ConfigError(
                f"helper timeout must be positive, got {self.helper_timeout}"
            )

    @property
    def resolved_sysfs_root(self) -> str:
        return self.sysfs_root or DEFAULT_SYSFS_ROOTS[self.network_mode]

    @classmethod
    def from_env(
        cls,
        sources: Optional[Sequence[str]] = None,
        rdt_bin: Optional[str] = None,
        helper_timeout: Optional[float] = None,
        sysfs_root: Optional[str] = None,
        network_mode: Optional[str] = None,
    ) -> "DiscoveryConfig":
        """Build a config, filling unset arguments from the environment."""
        if sources is None:
            env_sources = os.environ.get("NFD_SOURCES", "")
            sources = _split_sources(env_sources) if env_sources else SOURCE_NAMES

        if helper_timeout is None:
            raw = os.environ.get("NFD_HELPER_TIMEOUT", "")
            if raw:
                try:
                    helper_timeout = float(raw)
                except ValueError:
                    raise ConfigError(
                        f"NFD_HELPER_TIMEOUT must be a number, got {raw!r}"
                    ) from None
            else:
                helper_timeout = DEFAULT_HELPER_TIMEOUT

        return cls(
            sources=list(sources),
            rdt_bin=rdt_bin or os.environ.get("NFD_RDT_BIN", DEFAULT_RDT_BIN),
            helper_timeout=helper_timeout,
            sysfs_root=sysfs_root or os.environ.get("NFD_SYSFS_ROOT") or None,
            network_mode=network_mode or os.environ.get("NFD_NETWORK_MODE", MODE_HOST),
        )
