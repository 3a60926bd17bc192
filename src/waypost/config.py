"""Router scope configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from waypost.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Per-scope configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(initial_path="/templates", strict=True)
    """

    # Path recorded as the first history entry (and restored by reset())
    initial_path: str = "/"

    # Handler rendered when the current location is unmatched
    fallback: Callable[..., Any] | None = None

    # Raise AmbiguousRouteError instead of logging a warning
    strict: bool = False

    # Log every navigation at DEBUG on the "waypost.scope" logger
    log_navigation: bool = True

    def validate(self) -> None:
        """Check field values. Called once when a scope is created."""
        if not self.initial_path.startswith("/"):
            msg = f"initial_path must start with '/', got {self.initial_path!r}"
            raise ConfigurationError(msg)
        if self.fallback is not None and not callable(self.fallback):
            msg = f"fallback must be callable, got {type(self.fallback).__name__}"
            raise ConfigurationError(msg)
