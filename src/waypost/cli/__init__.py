"""Waypost CLI — inspect the patterns registered in a router scope.

Entry point registered as ``waypost`` in ``pyproject.toml``::

    [project.scripts]
    waypost = "waypost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypost`` command."""
    parser = argparse.ArgumentParser(
        prog="waypost",
        description="Waypost — scoped, nested path routing for UI regions.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypost routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered patterns")
    routes_parser.add_argument(
        "scope",
        help="Import string (e.g. myapp.routes:scope)",
    )

    # -- waypost match ----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a path against a scope")
    match_parser.add_argument(
        "scope",
        help="Import string (e.g. myapp.routes:scope)",
    )
    match_parser.add_argument("path", help="Concrete path, e.g. /templates/edit/42")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypost.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from waypost.cli._match import run_match

        run_match(args)
