"""Location patterns: placeholder discovery and substitution.

A template such as ``/users/{id}/posts/{post_id}`` is parsed once into
literal and placeholder segments.  ``{name:type}`` is accepted as well;
the ``path`` type keeps ``/`` in the substituted value, every other
placeholder is escaped as a single segment.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Mapping
from dataclasses import dataclass

from perch.errors import ConfigurationError, MissingPathParameterError, MissingPatternError
from perch.http.encoding import encode_path, encode_path_segment
from perch.locations.descriptor import Descriptor

_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")

# Placeholder type whose value may span several segments
PATH_TYPE = "path"


@dataclass(frozen=True, slots=True)
class PatternSegment:
    """A parsed piece of a location template.

    Literal:      ``/users/``  (is_param=False)
    Param:        ``{id}``     (is_param=True, param_name="id")
    Typed:        ``{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class LocationPattern:
    """A parsed location template. Immutable and shared between encoders."""

    template: str
    path_parameter_names: frozenset[str]
    segments: tuple[PatternSegment, ...]

    def format(self, path_values: Mapping[str, str]) -> str:
        """Substitute *path_values* into the template.

        Every value is percent-encoded.  Raises ``MissingPathParameterError``
        if a placeholder has no entry in *path_values*.
        """
        out: list[str] = []
        for seg in self.segments:
            if not seg.is_param:
                out.append(seg.value)
                continue
            name = seg.param_name or ""
            if name not in path_values:
                raise MissingPathParameterError(name, self.template)
            value = path_values[name]
            out.append(encode_path(value) if seg.param_type == PATH_TYPE else encode_path_segment(value))
        return "".join(out)


@functools.cache
def parse_template(template: str) -> LocationPattern:
    """Parse a location template into a ``LocationPattern``.

    Examples::

        "/users"              -> names frozenset()
        "/users/{id}"         -> names {"id"}
        "/files/{rest:path}"  -> names {"rest"}, rest keeps "/" when formatted

    Raises ``ConfigurationError`` on stray braces or empty placeholder names.
    """
    segments: list[PatternSegment] = []
    names: set[str] = set()
    position = 0

    for match in _PLACEHOLDER.finditer(template):
        literal = template[position : match.start()]
        if literal:
            _check_literal(literal, template)
            segments.append(PatternSegment(value=literal))

        inner = match.group(1).strip()
        param_name, _, param_type = inner.partition(":")
        if not param_name:
            msg = f"Empty placeholder in location template {template!r}"
            raise ConfigurationError(msg)

        segments.append(
            PatternSegment(
                value=match.group(0),
                is_param=True,
                param_name=param_name,
                param_type=param_type or "str",
            )
        )
        names.add(param_name)
        position = match.end()

    tail = template[position:]
    if tail:
        _check_literal(tail, template)
        segments.append(PatternSegment(value=tail))

    return LocationPattern(
        template=template,
        path_parameter_names=frozenset(names),
        segments=tuple(segments),
    )


def build_location_pattern(descriptor: Descriptor) -> LocationPattern:
    """Return the location pattern declared on a class-shaped descriptor."""
    if descriptor.location is None:
        msg = f"{descriptor.name} has no @location annotation"
        raise MissingPatternError(msg)
    return parse_template(descriptor.location)


def _check_literal(literal: str, template: str) -> None:
    if "{" in literal or "}" in literal:
        msg = f"Unbalanced braces in location template {template!r}"
        raise ConfigurationError(msg)
