"""Route nodes — declarative units that mount into a router scope.

A node contributes one path segment and one render handler. Nested
nodes compose their absolute path from their ancestors and inherit the
ancestors' handlers, so a leaf's handler stack is the whole layout
chain above it, root first::

    RouteNode("/bar", bar_layout,
        RouteNode("/foo", foo_view),   # registers "/bar/foo", stack (bar_layout, foo_view)
    )

A root-path node with children (``RouteNode("/", shell, ...)``) is a
pure layout: it wraps its children but occupies no registration itself.

Attaching and detaching are explicit so any presentation-layer lifecycle
(mount/unmount hooks, reactive effects, ``with`` blocks) can drive them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from waypost.routing.match import RenderHandler, RouteContext
from waypost.routing.pattern import parse_pattern

if TYPE_CHECKING:
    from waypost.scope import RouterScope


def join_paths(parent: str | None, path: str) -> str:
    """Compose an absolute pattern from the parent's absolute pattern.

    Examples::

        join_paths(None, "bar")      -> "/bar"
        join_paths("/bar", "/foo")   -> "/bar/foo"
        join_paths("/", "/")         -> "/"
    """
    if parent is None:
        return "/" + path.lstrip("/")
    return parent.rstrip("/") + "/" + path.lstrip("/")


class RouteGroup:
    """A non-route wrapper: groups children without adding a segment.

    Children see the group's parent route as their own parent.
    """

    __slots__ = ("children",)

    def __init__(self, *children: RouteNode | RouteGroup) -> None:
        self.children = children

    def __repr__(self) -> str:
        return f"RouteGroup({len(self.children)} children)"

    def attach(self, scope: RouterScope, parent: RouteNode | None = None) -> None:
        attached: list[RouteNode | RouteGroup] = []
        try:
            for child in self.children:
                child.attach(scope, parent)
                attached.append(child)
        except Exception:
            for child in reversed(attached):
                child.detach()
            raise

    def detach(self) -> None:
        for child in reversed(self.children):
            child.detach()


class RouteNode:
    """One path segment plus one render handler.

    While attached, the node's context is registered in the scope under
    its absolute path; detaching removes the registration again.
    """

    __slots__ = ("_context", "_registered", "_scope", "children", "handler", "name", "path")

    def __init__(
        self,
        path: str,
        handler: RenderHandler,
        *children: RouteNode | RouteGroup,
        name: str | None = None,
    ) -> None:
        # Fail fast on malformed patterns, before anything mounts
        parse_pattern(path)
        self.path = path
        self.handler = handler
        self.children = children
        self.name = name
        self._scope: RouterScope | None = None
        self._context: RouteContext | None = None
        self._registered: str | None = None

    def __repr__(self) -> str:
        state = "attached" if self.mounted else "detached"
        return f"RouteNode({self.path!r}, {state})"

    @property
    def mounted(self) -> bool:
        return self._scope is not None

    @property
    def context(self) -> RouteContext | None:
        """The context contributed while attached, else None."""
        return self._context

    @property
    def absolute_path(self) -> str | None:
        return self._context.path if self._context is not None else None

    @property
    def is_layout(self) -> bool:
        """Root-path node with children: wraps, never registers itself."""
        return bool(self.children) and join_paths(None, self.path) == "/"

    def attach(self, scope: RouterScope, parent: RouteNode | None = None) -> None:
        """Mount into *scope* under *parent*, then mount the children.

        Attaching an already attached node is a no-op. If any descendant
        fails to register, the whole subtree is detached again before the
        error propagates.
        """
        if self._scope is not None:
            return
        parent_context = parent.context if parent is not None else None
        if parent_context is None:
            absolute = join_paths(None, self.path)
            stack: tuple[RenderHandler, ...] = (self.handler,)
        else:
            absolute = join_paths(parent_context.path, self.path)
            stack = (*parent_context.handler_stack, self.handler)

        context = RouteContext(path=absolute, router_id=scope.id, handler_stack=stack)
        if not self.is_layout:
            scope.register_route(absolute, context)
            self._registered = absolute
        self._context = context
        self._scope = scope

        try:
            for child in self.children:
                child.attach(scope, self)
        except Exception:
            self.detach()
            raise

    def detach(self) -> None:
        """Unmount children, then remove this node's registration."""
        if self._scope is None:
            return
        for child in reversed(self.children):
            child.detach()
        if self._registered is not None:
            self._scope.deregister_route(self._registered, self._context)
        self._scope = None
        self._context = None
        self._registered = None
