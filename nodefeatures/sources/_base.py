"""Abstract feature source base class and error types."""

from __future__ import annotations

import abc


class SourceError(RuntimeError):
    """A source could not attempt detection at all."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class FeatureSource(abc.ABC):
    """Base class for node feature sources.

    ``discover()`` returns the feature names found on this node, or raises
    (normally :class:`SourceError`) when the probe itself is broken.  An
    empty list means the source checked and found nothing.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str: ...

    @abc.abstractmethod
    def discover(self) -> list[str]: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
