"""Tests for waypost.cli — entrypoint, argument parsing, and commands."""

import sys
import types
from typing import Any

import pytest

from waypost.cli import main
from waypost.nodes import RouteNode
from waypost.outlet import Outlet
from waypost.scope import RouterScope


def shell(outlet: Outlet, **props: Any) -> str:
    return f"<main>{outlet()}</main>"


def editor(outlet: Outlet, **props: Any) -> str:
    return "<form></form>"


@pytest.fixture
def _fake_routes_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module holding router scopes on sys.modules."""
    scope = RouterScope("resources")
    scope.attach(
        RouteNode("/", shell, RouteNode("/templates/:mode(edit|view)/:id?", editor))
    )
    mod = types.ModuleType("_fake_waypost_routes")
    mod.scope = scope  # type: ignore[attr-defined]
    mod.empty = RouterScope("empty")  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_waypost_routes", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_match_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_scope(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_match_missing_path(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "myapp:scope"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "waypost" in captured.out


@pytest.mark.usefixtures("_fake_routes_module")
class TestRoutesCommand:
    def test_lists_patterns(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_waypost_routes:scope"])
        out = capsys.readouterr().out
        assert "scope: resources" in out
        assert "PATTERN" in out
        assert "/templates/:mode(edit|view)/:id?" in out
        assert "shell > editor" in out

    def test_default_attribute(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_waypost_routes"])
        assert "resources" in capsys.readouterr().out

    def test_empty_scope(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_waypost_routes:empty"])
        assert "No routes registered in scope 'empty'." in capsys.readouterr().out

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_waypost_routes:missing"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_routes_module")
class TestMatchCommand:
    def test_matched(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "_fake_waypost_routes:scope", "/templates/edit"])
        out = capsys.readouterr().out
        assert "/templates/edit -> /templates/:mode(edit|view)/:id?" in out
        assert "mode = 'edit'" in out
        assert "id = None" in out

    def test_unmatched_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "_fake_waypost_routes:scope", "/templates/archive/1"])
        assert exc_info.value.code == 1
        assert "unmatched" in capsys.readouterr().out

    def test_match_does_not_navigate(self) -> None:
        main(["match", "_fake_waypost_routes:scope", "/templates/view/3"])
        scope = sys.modules["_fake_waypost_routes"].scope
        assert scope.history.entries == ("/",)
