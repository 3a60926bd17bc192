"""Waypost exception hierarchy.

Shared across the matcher, scopes, route nodes, and outlets so every
module raises and catches the same types.

An unmatched navigation is *not* an error: it comes back as an
``Unmatched`` value and callers render their fallback.
"""

from dataclasses import dataclass


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigurationError(WaypostError):
    """Raised when routes or scope configuration are invalid.

    Always a programmer error, surfaced at registration time rather
    than discovered later during matching.
    """


@dataclass(frozen=True, slots=True)
class PatternError(ConfigurationError):
    """A route pattern could not be parsed.

    Carries the offending pattern and the reason so the message points
    straight at the route declaration.
    """

    pattern: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid route pattern {self.pattern!r}: {self.reason}"


class AmbiguousRouteError(ConfigurationError):
    """Two patterns of equal specificity compete for the same position.

    Only raised when the scope runs with ``RouterConfig(strict=True)``;
    otherwise the newest registration wins and a warning is logged.
    """


class ScopeNotFound(WaypostError, LookupError):  # noqa: N818 — reads like LookupError
    """No ancestor scope carries the requested router id."""

    def __init__(self, router_id: str, available: tuple[str, ...] = ()) -> None:
        self.router_id = router_id
        self.available = available
        known = ", ".join(available) if available else "none"
        super().__init__(f"No router scope {router_id!r} in the parent chain (known: {known})")


class ScopeClosed(WaypostError):  # noqa: N818
    """The scope was closed; its patterns are unreachable."""


class OutletError(WaypostError):
    """An outlet was consumed more than once."""
