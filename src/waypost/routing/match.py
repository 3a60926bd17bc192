"""RouteContext and match-result frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, Literal

# A render handler: ``handler(outlet, **props) -> Any``
type RenderHandler = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class RouteContext:
    """What a mounted route node contributes to its scope.

    ``handler_stack`` is ordered ancestor-to-descendant: the outermost
    layout's handler first, the leaf's handler last.
    """

    path: str
    router_id: str
    handler_stack: tuple[RenderHandler, ...] = ()


@dataclass(frozen=True, slots=True)
class Matched:
    """A path that resolved to a registered pattern."""

    matched: ClassVar[Literal[True]] = True

    path: str
    params: dict[str, str | None]
    context: RouteContext | None
    pattern: str = ""


@dataclass(frozen=True, slots=True)
class Unmatched:
    """A path that no registered pattern accepts. Render the fallback."""

    matched: ClassVar[Literal[False]] = False

    path: str


type MatchResult = Matched | Unmatched
