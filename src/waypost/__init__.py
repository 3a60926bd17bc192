"""Waypost — scoped, nested path routing for UI regions.

Drives navigation inside independently scoped regions (an application
shell, a modal's multi-step flow) without a browser address bar.

Basic usage::

    from waypost import RouteNode, RouterScope

    scope = RouterScope("main")
    scope.attach(
        RouteNode("/", shell,
            RouteNode("/", landing),
            RouteNode("/projects/:id", project_view),
        )
    )

    result = scope.navigate("/projects/42")
    result.params      # {"id": "42"}
    scope.render()     # shell(outlet) -> project_view(outlet)

Kida templates as handlers::

    from waypost.templating import create_environment, template_handler
    env = create_environment("templates")
    shell = template_handler(env, "shell.html")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AmbiguousRouteError",
    "ConfigurationError",
    "HandlerChain",
    "HistoryLog",
    "MatchResult",
    "Matched",
    "Outlet",
    "OutletError",
    "PatternError",
    "PatternMatcher",
    "RouteContext",
    "RouteGroup",
    "RouteNode",
    "RouterConfig",
    "RouterScope",
    "ScopeClosed",
    "ScopeNotFound",
    "Unmatched",
    "WaypostError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    if name == "RouterScope":
        from waypost.scope import RouterScope

        return RouterScope

    if name == "RouterConfig":
        from waypost.config import RouterConfig

        return RouterConfig

    if name == "HistoryLog":
        from waypost.history import HistoryLog

        return HistoryLog

    if name in ("RouteNode", "RouteGroup"):
        from waypost import nodes as _nodes

        return getattr(_nodes, name)

    if name in ("HandlerChain", "Outlet"):
        from waypost import outlet as _outlet

        return getattr(_outlet, name)

    if name == "PatternMatcher":
        from waypost.routing.matcher import PatternMatcher

        return PatternMatcher

    if name in ("MatchResult", "Matched", "RouteContext", "Unmatched"):
        from waypost.routing import match as _match

        return getattr(_match, name)

    if name in (
        "AmbiguousRouteError",
        "ConfigurationError",
        "OutletError",
        "PatternError",
        "ScopeClosed",
        "ScopeNotFound",
        "WaypostError",
    ):
        from waypost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
