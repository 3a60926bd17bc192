"""Locate a router scope from a ``module[:attr[.attr...]]`` target string."""

import importlib
from typing import Any

from waypost.scope import RouterScope

DEFAULT_ATTRIBUTE = "scope"


def _walk(obj: Any, dotted: str, target: str) -> Any:
    for name in dotted.split("."):
        try:
            obj = getattr(obj, name)
        except AttributeError as exc:
            msg = f"{target!r}: {type(obj).__name__} has no attribute {name!r}"
            raise AttributeError(msg) from exc
    return obj


def resolve_scope(target: str) -> RouterScope:
    """Import *target* and return the ``RouterScope`` it names.

    ``"shell.routes"`` looks up ``shell.routes.scope``;
    ``"shell.routes:modal"`` looks up ``modal``; the part after the
    colon may be dotted (``"shell:app.router"``) to reach a scope held
    on another object. A callable that is not itself a scope is treated
    as a factory and called once with no arguments.

    Raises ``ModuleNotFoundError`` or ``AttributeError`` when the target
    does not exist, and ``TypeError`` when it is not a scope (or its
    factory fails).
    """
    module_name, sep, attr_path = target.partition(":")
    module = importlib.import_module(module_name)
    found = _walk(module, attr_path if sep and attr_path else DEFAULT_ATTRIBUTE, target)

    if not isinstance(found, RouterScope) and callable(found):
        try:
            found = found()
        except Exception as exc:
            msg = f"Scope factory {target!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(found, RouterScope):
        return found
    msg = f"{target!r} is a {type(found).__name__}, not a waypost.RouterScope"
    raise TypeError(msg)
