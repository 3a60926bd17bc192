"""``waypost match`` — resolve one path against a scope.

Prints the winning pattern and captured params; exits with status 1
when the path is unmatched so scripts can branch on it.
"""

import argparse
import sys

from waypost.cli._resolve import resolve_scope


def run_match(args: argparse.Namespace) -> None:
    """Match ``args.path`` against the scope named by ``args.scope``."""
    try:
        scope = resolve_scope(args.scope)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = scope.match(args.path)
    if not result.matched:
        print(f"{args.path}: unmatched")
        raise SystemExit(1)

    print(f"{args.path} -> {result.pattern}")
    for name, value in result.params.items():
        print(f"  {name} = {value!r}")
