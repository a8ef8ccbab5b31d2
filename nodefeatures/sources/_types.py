"""Shared dataclasses for feature discovery."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DiscoveryResult:
    """Outcome of one discovery pass: features and failure reasons by source name."""

    features: dict[str, list[str]] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)  # source name -> reason
    diagnostics: list[str] = field(default_factory=list)
    timestamp: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "features": {name: list(feats) for name, feats in self.features.items()},
            "errors": dict(self.errors),
            "timestamp": self.timestamp,
        }
