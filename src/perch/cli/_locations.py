"""``perch locations`` — list registered location classes.

Prints one row per class: name, path template, and which fields go to
the path and which to the query string.
"""

import argparse
import sys

from perch.cli._resolve import resolve_locations


def run_locations(args: argparse.Namespace) -> None:
    """Print a table of CLASS, PATTERN, PATH PARAMS and QUERY PARAMS."""
    try:
        locations = resolve_locations(args.locations)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = locations.routes
    if not routes:
        print("No locations registered.")
        return

    rows: list[tuple[str, str, str, str]] = [
        (
            info.name,
            info.template,
            ", ".join(info.path_parameters) or "-",
            ", ".join(info.query_parameters) or "-",
        )
        for info in routes
    ]

    headers = ("CLASS", "PATTERN", "PATH PARAMS", "QUERY PARAMS")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
