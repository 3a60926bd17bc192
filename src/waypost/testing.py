"""Assertion helpers for tests written against router scopes.

Each assertion produces a clear error message on failure, naming the
path and what was registered instead.
"""

from typing import Any

from waypost.routing.match import Matched, MatchResult
from waypost.scope import RouterScope


def assert_matched(result: MatchResult, pattern: str | None = None, **params: Any) -> Matched:
    """Assert *result* matched, optionally checking pattern and params.

    Every keyword argument must appear in the captured params with the
    given value. Returns the narrowed ``Matched`` for further checks.
    """
    assert isinstance(result, Matched), f"Expected {result.path!r} to match, got {result!r}"
    if pattern is not None:
        assert result.pattern == pattern, (
            f"Expected {result.path!r} to match {pattern!r}, matched {result.pattern!r}"
        )
    for name, expected in params.items():
        assert name in result.params, (
            f"Param {name!r} not captured for {result.path!r}; params: {result.params!r}"
        )
        assert result.params[name] == expected, (
            f"Param {name!r}: expected {expected!r}, got {result.params[name]!r}"
        )
    return result


def assert_unmatched(result: MatchResult) -> None:
    """Assert *result* is unmatched."""
    assert not result.matched, (
        f"Expected {result.path!r} to be unmatched, matched {getattr(result, 'pattern', '')!r}"
    )


def registered_patterns(scope: RouterScope) -> list[str]:
    """Return the normalized patterns currently registered in *scope*."""
    return [entry.pattern for entry in scope.matcher.entries]


def assert_registered(scope: RouterScope, *patterns: str) -> None:
    """Assert exactly *patterns* are registered in *scope* (any order)."""
    actual = sorted(registered_patterns(scope))
    assert actual == sorted(patterns), (
        f"Scope {scope.id!r} registers {actual!r}, expected {sorted(patterns)!r}"
    )
