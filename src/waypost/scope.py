"""Router scopes — one independent routing domain per mount point.

A scope owns a pattern matcher and a history log. The application shell
creates one root scope; a modal's internal flow can create another root
scope (no parent) without the two ever seeing each other's patterns.

Scopes are passed explicitly to whatever needs them. A child scope holds
a reference to its parent only for ancestor lookup; pattern matching
never crosses scope boundaries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from waypost.config import RouterConfig
from waypost.errors import ScopeClosed, ScopeNotFound
from waypost.history import HistoryLog
from waypost.outlet import HandlerChain, render_chain
from waypost.routing.match import Matched, MatchResult, RouteContext, Unmatched
from waypost.routing.matcher import MatcherSnapshot, PatternMatcher
from waypost.routing.pattern import normalize_pattern

if TYPE_CHECKING:
    from waypost.nodes import RouteNode

logger = logging.getLogger("waypost.scope")

type LocationListener = Callable[[MatchResult], None]


class RouterScope:
    """An independent routing domain with its own matcher and history.

    Usage::

        scope = RouterScope("resources", config=RouterConfig(fallback=not_found))
        scope.attach(
            RouteNode("/", modal_layout,
                RouteNode("/", index_view),
                RouteNode("/templates/:mode(edit|view)/:id?", template_editor),
            )
        )
        result = scope.navigate("/templates/edit/42")
        html = scope.render()

    ``location`` is recomputed whenever the matcher changes, not only on
    navigation: mounting or unmounting a route can change whether the
    current path matches.
    """

    __slots__ = (
        "_closed",
        "_history",
        "_listeners",
        "_location",
        "_location_key",
        "_owners",
        "_snapshot",
        "config",
        "id",
        "parent",
    )

    def __init__(
        self,
        router_id: str,
        *,
        parent: RouterScope | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        self.config = config or RouterConfig()
        self.config.validate()
        self.id = router_id
        self.parent = parent
        self._snapshot = MatcherSnapshot(0, PatternMatcher(strict=self.config.strict))
        self._history = HistoryLog(self.config.initial_path, on_change=self._notify)
        # Contexts registered under each normalized pattern, oldest first
        self._owners: dict[str, list[RouteContext]] = {}
        self._listeners: list[LocationListener] = []
        self._closed = False
        self._location_key: tuple[int, str | None] = (0, self.config.initial_path)
        self._location: MatchResult = Unmatched(self.config.initial_path)

    def __repr__(self) -> str:
        return f"RouterScope(id={self.id!r}, path={self.path!r}, generation={self.generation})"

    def __enter__(self) -> RouterScope:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Matcher ----------------------------------------------------------

    @property
    def snapshot(self) -> MatcherSnapshot:
        """The currently published matcher and its generation."""
        return self._snapshot

    @property
    def matcher(self) -> PatternMatcher:
        return self._snapshot.matcher

    @property
    def generation(self) -> int:
        """Increases on every registration change. Compare, don't diff."""
        return self._snapshot.generation

    @property
    def closed(self) -> bool:
        return self._closed

    def register_route(self, path: str, context: RouteContext) -> None:
        """Register *path* with *context*.

        An identical pattern already registered is shadowed, not lost:
        deregistering *context* later restores the previous owner.

        Raises ``PatternError`` for malformed patterns and, in strict
        mode, ``AmbiguousRouteError``. The published snapshot is left
        untouched when registration fails.
        """
        if self._closed:
            msg = f"Cannot register {path!r}: router scope {self.id!r} is closed"
            raise ScopeClosed(msg)
        key = normalize_pattern(path)
        matcher = self._snapshot.matcher.copy()
        matcher.register(key, context)
        self._owners.setdefault(key, []).append(context)
        self._publish(matcher)
        logger.debug("[%s] registered %s (generation %d)", self.id, key, self.generation)

    def deregister_route(self, path: str, context: RouteContext | None = None) -> None:
        """Withdraw one registration of *path*.

        Removes *context*, or the newest registration when *context* is
        None. If an earlier owner of the same pattern remains, it takes
        the pattern back; otherwise the pattern is unregistered. Unknown
        paths, unknown contexts and closed scopes are a no-op.
        """
        if self._closed:
            return
        key = normalize_pattern(path)
        owners = self._owners.get(key)
        if not owners:
            return
        if context is None:
            owners.pop()
        else:
            for i in range(len(owners) - 1, -1, -1):
                if owners[i] is context:
                    del owners[i]
                    break
            else:
                return

        matcher = self._snapshot.matcher.copy()
        if owners:
            matcher.register(key, owners[-1])
        else:
            del self._owners[key]
            matcher.unregister(key)
        self._publish(matcher)
        logger.debug("[%s] deregistered %s (generation %d)", self.id, key, self.generation)

    def _publish(self, matcher: PatternMatcher) -> None:
        self._snapshot = MatcherSnapshot(self._snapshot.generation + 1, matcher)
        self._notify()

    # -- Matching and navigation ------------------------------------------

    def match(self, path: str) -> MatchResult:
        """Match *path* against the current patterns without recording it."""
        found = self._snapshot.matcher.match(path)
        if found is None:
            return Unmatched(path)
        return Matched(
            path=path,
            params=found.params,
            context=found.payload,
            pattern=found.entry.pattern,
        )

    def navigate(self, path: str) -> MatchResult:
        """Record *path* in the history and return its match.

        Navigations apply in call order; each one adds a history entry.
        An unmatched result is a normal outcome, not an error.
        """
        self._history.push(path)
        result = self.match(path)
        if self.config.log_navigation:
            logger.debug(
                "[%s] navigate %s -> %s",
                self.id,
                path,
                result.pattern if result.matched else "unmatched",
            )
        return result

    @property
    def location(self) -> MatchResult:
        """Match result for the current history entry.

        Cached per ``(generation, path)`` so repeated reads are cheap.
        """
        key = (self.generation, self._history.current)
        if key != self._location_key:
            current = self._history.current
            self._location = self.match(current) if current is not None else Unmatched("")
            self._location_key = key
        return self._location

    @property
    def path(self) -> str | None:
        return self._history.current

    @property
    def params(self) -> dict[str, str | None] | None:
        """Captured parameters of the location, or None when unmatched."""
        location = self.location
        return location.params if location.matched else None

    # -- History ----------------------------------------------------------

    @property
    def history(self) -> HistoryLog:
        """The scope's log. Moves made on it directly notify listeners too."""
        return self._history

    def back(self, n: int = 1) -> MatchResult:
        self._history.back(n)
        return self.location

    def forward(self, n: int = 1) -> MatchResult:
        self._history.forward(n)
        return self.location

    def reset(self) -> MatchResult:
        """Truncate the history to the initial path."""
        self._history.reset()
        return self.location

    # -- Reactivity -------------------------------------------------------

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        """Call *listener* with the new location whenever it changes.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        previous = self._location
        location = self.location
        if location == previous:
            return
        for listener in list(self._listeners):
            listener(location)

    # -- Ancestors --------------------------------------------------------

    @property
    def ancestors(self) -> dict[str, RouterScope]:
        """Ancestor scopes by id, root first, nearest last."""
        chain: list[RouterScope] = []
        scope = self.parent
        while scope is not None:
            chain.append(scope)
            scope = scope.parent
        return {s.id: s for s in reversed(chain)}

    def ancestor(self, router_id: str) -> RouterScope:
        """Return the nearest ancestor named *router_id*.

        Raises ``ScopeNotFound`` if no ancestor carries that id.
        """
        scope = self.parent
        while scope is not None:
            if scope.id == router_id:
                return scope
            scope = scope.parent
        raise ScopeNotFound(router_id, tuple(self.ancestors))

    def lookup(self, router_id: str | None = None) -> RouterScope:
        """Return this scope, or the named ancestor when *router_id* is given."""
        if router_id is None:
            return self
        return self.ancestor(router_id)

    # -- Route nodes ------------------------------------------------------

    def attach(self, *nodes: RouteNode) -> None:
        """Mount route nodes (and their children) into this scope.

        All or nothing: if one node fails to register, the nodes mounted
        by this call are detached before the error propagates.
        """
        attached: list[RouteNode] = []
        try:
            for node in nodes:
                node.attach(self)
                attached.append(node)
        except Exception:
            self.detach(*attached)
            raise

    def detach(self, *nodes: RouteNode) -> None:
        """Unmount route nodes, most recently attached first."""
        for node in reversed(nodes):
            node.detach()

    @contextmanager
    def attached(self, *nodes: RouteNode) -> Iterator[RouterScope]:
        """Keep *nodes* mounted for the duration of a ``with`` block."""
        self.attach(*nodes)
        try:
            yield self
        finally:
            self.detach(*nodes)

    # -- Rendering --------------------------------------------------------

    def handler_chain(self) -> HandlerChain | None:
        """Handler chain for the current location, or the fallback chain."""
        location = self.location
        if location.matched and location.context is not None:
            return HandlerChain.from_stack(location.context.handler_stack)
        if self.config.fallback is not None:
            return HandlerChain(self.config.fallback)
        return None

    def render(self, **props: Any) -> Any:
        """Render the current location through the outlet chain."""
        return render_chain(self.handler_chain(), self.location, **props)

    # -- Lifecycle --------------------------------------------------------

    def close(self) -> None:
        """Destroy the scope. All registered patterns become unreachable."""
        if self._closed:
            return
        self._closed = True
        self._snapshot = MatcherSnapshot(self._snapshot.generation + 1, PatternMatcher())
        self._owners.clear()
        self._listeners.clear()
        logger.debug("[%s] closed", self.id)
