"""Locations — typed dataclasses rendered to URLs.

A location class declares a path template; its fields named by template
placeholders fill the path, the rest become query parameters.
"""

from perch.locations.annotation import location, location_of
from perch.locations.conversion import DEFAULT_CONVERSIONS, ConversionService, Converted, NotConvertible
from perch.locations.descriptor import Descriptor, StructureKind, describe
from perch.locations.encoder import URLEncoder, encode_location
from perch.locations.pattern import LocationPattern, build_location_pattern, parse_template
from perch.locations.registry import LocationInfo, Locations

__all__ = [
    "DEFAULT_CONVERSIONS",
    "ConversionService",
    "Converted",
    "Descriptor",
    "LocationInfo",
    "LocationPattern",
    "Locations",
    "NotConvertible",
    "StructureKind",
    "URLEncoder",
    "build_location_pattern",
    "describe",
    "encode_location",
    "location",
    "location_of",
    "parse_template",
]
