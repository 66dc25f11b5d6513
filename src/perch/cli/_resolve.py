"""Registry import resolution — resolves ``"module:attribute"`` strings to Locations.

Shared utility used by ``perch locations`` and ``perch href``.
"""

import importlib

from perch.locations.registry import Locations


def resolve_locations(import_string: str) -> Locations:
    """Resolve an import string to a perch ``Locations`` registry.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"locations"`` (e.g. ``"myapp"`` resolves to
    ``myapp.locations``).

    Supports factory functions: if the resolved object is callable and
    not a Locations instance, it is called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``Locations`` or callable.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "locations"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Locations):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Locations):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a perch.Locations instance"
        raise TypeError(msg)

    return obj
