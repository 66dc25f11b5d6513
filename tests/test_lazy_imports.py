"""Tests for perch.__init__ — lazy import registry covers all public names."""


import pytest

import perch


@pytest.mark.parametrize("name", perch.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(perch, name)
    assert obj is not None, f"perch.{name} resolved to None"


def test_all_names_in_lazy_registry() -> None:
    """Every name in __all__ has a corresponding entry in _LAZY_IMPORTS."""
    missing = set(perch.__all__) - set(perch._LAZY_IMPORTS)
    assert not missing, f"Names in __all__ but not in _LAZY_IMPORTS: {sorted(missing)}."


def test_lazy_registry_no_extras() -> None:
    """Every name in _LAZY_IMPORTS should be in __all__ (public API contract)."""
    extras = set(perch._LAZY_IMPORTS) - set(perch.__all__)
    assert not extras, f"Names in _LAZY_IMPORTS but not in __all__: {sorted(extras)}."


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        perch.__getattr__("ThisDoesNotExist")


def test_top_level_usage() -> None:
    from dataclasses import dataclass

    locations = perch.Locations()

    @locations.location("/users/{id}/posts")
    @dataclass(frozen=True, slots=True)
    class UserPosts:
        id: int
        page: int = 1

    assert locations.href(UserPosts(id=7, page=2)) == "/users/7/posts?page=2"
