"""Tests for perch.cli — CLI entrypoint, ``perch locations`` and ``perch href``."""

import types
from dataclasses import dataclass

import pytest

from perch.cli import main
from perch.cli._href import parse_params
from perch.config import LocationsConfig
from perch.locations.registry import Locations


@pytest.fixture
def _fake_locations_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a populated registry on sys.modules."""
    locations = Locations(LocationsConfig(base_url="https://example.com"))

    @locations.location("/users/{id}")
    @dataclass(frozen=True, slots=True)
    class User:
        id: int
        tab: str = "profile"
        tags: tuple[str, ...] = ()

    @locations.location("/health")
    @dataclass(frozen=True, slots=True)
    class Health:
        pass

    mod = types.ModuleType("_fake_perch_cli")
    mod.locations = locations  # type: ignore[attr-defined]
    mod.empty = Locations()  # type: ignore[attr-defined]
    monkeypatch.setitem(__import__("sys").modules, "_fake_perch_cli", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_locations_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["locations", "--help"])
        assert exc_info.value.code == 0

    def test_href_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["href", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_locations_missing_import(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["locations"])
        assert exc_info.value.code == 2

    def test_href_missing_location(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["href", "myapp:locations"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "perch" in captured.out


@pytest.mark.usefixtures("_fake_locations_module")
class TestLocationsCommand:
    def test_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["locations", "_fake_perch_cli:locations"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["CLASS", "PATTERN", "PATH", "PARAMS", "QUERY", "PARAMS"]
        assert set(lines[1]) == {"-"}
        assert lines[2].split() == ["User", "/users/{id}", "id", "tab,", "tags"]
        assert lines[3].split() == ["Health", "/health", "-", "-"]

    def test_empty_registry(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["locations", "_fake_perch_cli:empty"])
        assert capsys.readouterr().out.strip() == "No locations registered."

    def test_unresolvable_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["locations", "nonexistent_module_xyz"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")


@pytest.mark.usefixtures("_fake_locations_module")
class TestHrefCommand:
    def test_href(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["href", "_fake_perch_cli:locations", "User", "id=7", "tab=posts"])
        assert capsys.readouterr().out.strip() == "/users/7?tab=posts"

    def test_repeated_names_become_list(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["href", "_fake_perch_cli:locations", "User", "id=7", "tags=a", "tags=b"])
        assert capsys.readouterr().out.strip() == "/users/7?tab=profile&tags=a&tags=b"

    def test_absolute(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["href", "_fake_perch_cli:locations", "User", "id=7", "--absolute"])
        assert capsys.readouterr().out.strip() == "https://example.com/users/7?tab=profile"

    def test_unknown_location(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["href", "_fake_perch_cli:locations", "Nope"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "no location named 'Nope'" in err
        assert "User, Health" in err

    def test_missing_required_field(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["href", "_fake_perch_cli:locations", "User"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_malformed_param(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["href", "_fake_perch_cli:locations", "User", "oops"])
        assert exc_info.value.code == 1
        assert "Expected NAME=VALUE" in capsys.readouterr().err


class TestParseParams:
    def test_single_and_repeated(self) -> None:
        assert parse_params(["a=1", "b=2", "b=3", "b=4"]) == {"a": "1", "b": ["2", "3", "4"]}

    def test_value_may_contain_equals(self) -> None:
        assert parse_params(["q=a=b"]) == {"q": "a=b"}

    def test_empty_value(self) -> None:
        assert parse_params(["q="]) == {"q": ""}

    @pytest.mark.parametrize("param", ["novalue", "=value"])
    def test_malformed(self, param: str) -> None:
        with pytest.raises(ValueError, match="Expected NAME=VALUE"):
            parse_params([param])
