"""Perch CLI — location introspection and href rendering.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — typed locations rendered to URLs.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch locations --------------------------------------------------
    locations_parser = subparsers.add_parser("locations", help="List registered locations")
    locations_parser.add_argument(
        "locations",
        help="Import string (e.g. myapp:locations)",
    )

    # -- perch href -------------------------------------------------------
    href_parser = subparsers.add_parser("href", help="Render the href of a location")
    href_parser.add_argument(
        "locations",
        help="Import string (e.g. myapp:locations)",
    )
    href_parser.add_argument("location", help="Registered location class name")
    href_parser.add_argument(
        "params",
        nargs="*",
        metavar="NAME=VALUE",
        help="Field values; repeat a name for collection fields",
    )
    href_parser.add_argument(
        "--absolute",
        action="store_true",
        help="Print the full URL on the configured base URL",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "locations":
        from perch.cli._locations import run_locations

        run_locations(args)
    elif args.command == "href":
        from perch.cli._href import run_href

        run_href(args)
