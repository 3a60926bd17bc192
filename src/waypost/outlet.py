"""Outlet resolution — render a handler stack one level at a time.

A matched route carries its handler stack root-first. Rendering walks
it like a middleware chain: each handler receives an ``Outlet`` for the
rest of the chain and decides where (and whether) the next level goes::

    def shell(outlet: Outlet, **props) -> str:
        return f"<main>{outlet()}</main>"

    def editor(outlet: Outlet, **props) -> str:
        return f"<form data-id='{outlet.params['id']}'></form>"

    render_chain(HandlerChain.from_stack((shell, editor)), location)

No ambient context is involved: the remaining chain travels as an
explicit argument.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from waypost.errors import OutletError

if TYPE_CHECKING:
    from waypost.routing.match import MatchResult, RenderHandler


@dataclass(frozen=True, slots=True)
class HandlerChain:
    """Singly-linked list of render handlers, root first."""

    head: RenderHandler
    tail: HandlerChain | None = None

    @classmethod
    def from_stack(cls, stack: Sequence[RenderHandler]) -> HandlerChain | None:
        """Build a chain from a root-first handler stack. Empty stack -> None."""
        chain: HandlerChain | None = None
        for handler in reversed(stack):
            chain = cls(handler, chain)
        return chain

    def __iter__(self) -> Iterator[RenderHandler]:
        node: HandlerChain | None = self
        while node is not None:
            yield node.head
            node = node.tail

    def __len__(self) -> int:
        return sum(1 for _ in self)


class Outlet:
    """The single descent point a handler uses to render the next level.

    Calling the outlet renders the remaining chain and returns its
    output; when nothing remains it returns ``None``. Keyword arguments
    are passed through to the next handler. An outlet can be consumed
    only once.
    """

    __slots__ = ("_consumed", "_remaining", "location")

    def __init__(self, remaining: HandlerChain | None, location: MatchResult) -> None:
        self._remaining = remaining
        self._consumed = False
        self.location = location

    def __repr__(self) -> str:
        depth = len(self._remaining) if self._remaining is not None else 0
        return f"Outlet(path={self.location.path!r}, remaining={depth})"

    @property
    def params(self) -> dict[str, str | None]:
        """Captured parameters of the location (empty when unmatched)."""
        if self.location.matched:
            return self.location.params
        return {}

    @property
    def remaining(self) -> HandlerChain | None:
        return self._remaining

    @property
    def is_leaf(self) -> bool:
        """True when nothing is left to render below this level."""
        return self._remaining is None

    def __call__(self, **props: Any) -> Any:
        if self._consumed:
            msg = f"Outlet for {self.location.path!r} was already rendered"
            raise OutletError(msg)
        self._consumed = True
        return render_chain(self._remaining, self.location, **props)


def render_chain(chain: HandlerChain | None, location: MatchResult, **props: Any) -> Any:
    """Render *chain*'s head with an outlet over its tail.

    Returns ``None`` for an empty chain: the previous level was the leaf.
    """
    if chain is None:
        return None
    return chain.head(Outlet(chain.tail, location), **props)
