"""``waypost routes`` — list registered patterns.

Resolves an import string to a router scope and prints every registered
pattern with its handler chain.
"""

import argparse
import sys

from waypost.cli._resolve import resolve_scope


def _handler_name(handler: object) -> str:
    return getattr(handler, "__name__", type(handler).__name__)


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATTERN and HANDLERS for a scope."""
    try:
        scope = resolve_scope(args.scope)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    entries = scope.matcher.entries
    if not entries:
        print(f"No routes registered in scope {scope.id!r}.")
        return

    rows: list[tuple[str, str]] = []
    for entry in entries:
        stack = getattr(entry.payload, "handler_stack", ())
        rows.append((entry.pattern, " > ".join(_handler_name(h) for h in stack)))

    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_pattern}}}  {{}}"
    print(f"scope: {scope.id} (generation {scope.generation})")
    print(fmt.format("PATTERN", "HANDLERS"))
    sep_len = max_pattern + 2 + max(len(r[1]) for r in rows)
    print("-" * min(max(sep_len, 16), 80))
    for pattern, handlers in rows:
        print(fmt.format(pattern, handlers))
