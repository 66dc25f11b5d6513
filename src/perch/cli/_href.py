"""``perch href`` — render a location from command-line field values.

Example::

    perch href myapp:locations UserPosts id=7 page=2
    /users/7/posts?page=2
"""

import argparse
import sys

from perch.cli._resolve import resolve_locations
from perch.errors import PerchError
from perch.extraction import extract_dataclass


def parse_params(params: list[str]) -> dict[str, str | list[str]]:
    """Parse ``NAME=VALUE`` arguments; a repeated name collects a list."""
    data: dict[str, str | list[str]] = {}
    for param in params:
        name, sep, value = param.partition("=")
        if not sep or not name:
            msg = f"Expected NAME=VALUE, got {param!r}"
            raise ValueError(msg)
        existing = data.get(name)
        if existing is None:
            data[name] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            data[name] = [existing, value]
    return data


def run_href(args: argparse.Namespace) -> None:
    """Build the named location from ``args.params`` and print its href."""
    try:
        locations = resolve_locations(args.locations)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    cls = locations.get(args.location)
    if cls is None:
        known = ", ".join(info.name for info in locations.routes) or "none"
        print(f"Error: no location named {args.location!r} (registered: {known})", file=sys.stderr)
        raise SystemExit(1)

    try:
        data = parse_params(args.params)
        value = extract_dataclass(cls, data, locations.conversions)
        output = str(locations.url(value)) if args.absolute else locations.href(value)
    except (ValueError, TypeError, PerchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(output)
