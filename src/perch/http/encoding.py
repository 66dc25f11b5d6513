"""Percent-encoding primitives for URL paths and query strings.

Thin wrappers over ``urllib.parse`` so every module escapes the same
way: path segments and query components use ``%20`` for spaces and
escape every reserved character.
"""

from collections.abc import Iterable
from urllib.parse import quote, unquote, urlencode


def encode_path_segment(value: str) -> str:
    """Percent-encode *value* for use as a single path segment.

    ``/`` is escaped so the value can never split into two segments.
    """
    return quote(value, safe="")


def encode_path(value: str) -> str:
    """Percent-encode *value* as a path, leaving ``/`` separators intact."""
    return quote(value, safe="/")


def decode_url_part(value: str) -> str:
    """Percent-decode a path segment or query component."""
    return unquote(value)


def form_url_encode(pairs: Iterable[tuple[str, str]]) -> str:
    """Serialize ordered ``(name, value)`` pairs as ``k=v&k2=v2``.

    Example::

        form_url_encode([("q", "hello world"), ("tag", "a"), ("tag", "b")])
        → "q=hello%20world&tag=a&tag=b"

    """
    return urlencode(list(pairs), quote_via=quote)
