"""Tests for waypost.config — RouterConfig frozen dataclass."""

from typing import Any

import pytest

from waypost.config import RouterConfig
from waypost.errors import ConfigurationError
from waypost.scope import RouterScope


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.initial_path == "/"
        assert cfg.fallback is None
        assert cfg.strict is False
        assert cfg.log_navigation is True

    def test_override(self) -> None:
        def fallback(outlet: Any) -> str:
            return "ERROR!"

        cfg = RouterConfig(initial_path="/start", fallback=fallback, strict=True)

        assert cfg.initial_path == "/start"
        assert cfg.fallback is fallback
        assert cfg.strict is True

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.strict = True  # type: ignore[misc]

    def test_relative_initial_path_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="initial_path"):
            RouterScope("main", config=RouterConfig(initial_path="start"))

    def test_non_callable_fallback_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="fallback must be callable"):
            RouterConfig(fallback="oops").validate()  # type: ignore[arg-type]

    def test_initial_path_seeds_history(self) -> None:
        scope = RouterScope("main", config=RouterConfig(initial_path="/start"))
        assert scope.history.entries == ("/start",)
        assert scope.path == "/start"
