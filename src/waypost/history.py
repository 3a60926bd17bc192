"""History log — visited paths with a cursor.

Each router scope owns one log. Navigating truncates any entries after
the cursor (the "redo" tail) before appending, like a browser's
back/forward stack.
"""

from collections.abc import Callable


class HistoryLog:
    """Ordered record of visited paths with a cursor.

    Usage::

        log = HistoryLog()
        log.push("/a")
        log.push("/b")
        log.back()      # "/a"
        log.push("/c")  # entries: ["/a", "/c"]

    A log created with an initial path starts with that one entry; a
    fresh log starts empty. Once non-empty, the cursor always satisfies
    ``0 <= cursor < len(entries)``.

    *on_change* is called after every push, cursor move and reset, so the
    owning scope sees moves made directly on the log too.
    """

    __slots__ = ("_cursor", "_entries", "_initial", "_on_change")

    def __init__(
        self,
        initial_path: str | None = None,
        *,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._initial = initial_path
        self._entries: list[str] = [] if initial_path is None else [initial_path]
        self._cursor = 0
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HistoryLog(entries={self._entries!r}, cursor={self._cursor})"

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> str | None:
        """The path under the cursor, or None while the log is empty."""
        if not self._entries:
            return None
        return self._entries[self._cursor]

    @property
    def initial(self) -> str | None:
        return self._initial

    @property
    def can_go_back(self) -> bool:
        return self._cursor > 0

    @property
    def can_go_forward(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def push(self, path: str) -> None:
        """Append *path* after the cursor, discarding the redo tail."""
        del self._entries[self._cursor + 1 :]
        self._entries.append(path)
        self._cursor = len(self._entries) - 1
        self._changed()

    def back(self, n: int = 1) -> str | None:
        """Move the cursor back by *n*, clamped. Returns the current path."""
        return self._move(-n)

    def forward(self, n: int = 1) -> str | None:
        """Move the cursor forward by *n*, clamped. Returns the current path."""
        return self._move(n)

    def reset(self) -> str | None:
        """Truncate to a single entry at the initial path (empty if none)."""
        self._entries = [] if self._initial is None else [self._initial]
        self._cursor = 0
        self._changed()
        return self._initial

    def _move(self, delta: int) -> str | None:
        self._cursor = max(min(self._cursor + delta, len(self._entries) - 1), 0)
        self._changed()
        return self.current

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
