"""Tests for waypost.history — cursor-based history log."""

from waypost.history import HistoryLog


class TestPush:
    def test_fresh_log_is_empty(self) -> None:
        log = HistoryLog()
        assert log.entries == ()
        assert log.current is None

    def test_push_moves_cursor(self) -> None:
        log = HistoryLog()
        log.push("/a")
        log.push("/b")
        assert log.entries == ("/a", "/b")
        assert log.cursor == 1
        assert log.current == "/b"

    def test_initial_path_is_first_entry(self) -> None:
        log = HistoryLog("/")
        log.push("/a")
        assert log.entries == ("/", "/a")
        assert log.initial == "/"

    def test_push_truncates_redo_tail(self) -> None:
        log = HistoryLog()
        log.push("/a")
        log.push("/b")
        log.back()
        log.push("/c")
        assert log.entries == ("/a", "/c")
        assert log.current == "/c"
        assert not log.can_go_forward

    def test_same_path_twice_is_two_entries(self) -> None:
        log = HistoryLog()
        log.push("/a")
        log.push("/a")
        assert len(log) == 2


class TestCursor:
    def test_back_and_forward(self) -> None:
        log = HistoryLog()
        log.push("/a")
        log.push("/b")
        assert log.back() == "/a"
        assert log.forward() == "/b"
        assert log.entries == ("/a", "/b")

    def test_clamped(self) -> None:
        log = HistoryLog("/")
        log.push("/a")
        log.push("/b")
        assert log.back(10) == "/"
        assert log.cursor == 0
        assert log.forward(10) == "/b"
        assert log.cursor == 2

    def test_moves_on_empty_log(self) -> None:
        log = HistoryLog()
        assert log.back() is None
        assert log.forward() is None
        assert log.cursor == 0

    def test_can_go_flags(self) -> None:
        log = HistoryLog("/")
        assert not log.can_go_back
        log.push("/a")
        assert log.can_go_back
        log.back()
        assert log.can_go_forward


class TestReset:
    def test_reset_to_initial(self) -> None:
        log = HistoryLog("/start")
        log.push("/a")
        log.push("/b")
        assert log.reset() == "/start"
        assert log.entries == ("/start",)
        assert log.cursor == 0

    def test_reset_without_initial(self) -> None:
        log = HistoryLog()
        log.push("/a")
        log.reset()
        assert log.entries == ()
        assert log.current is None


class TestOnChange:
    def test_called_after_every_change(self) -> None:
        seen: list[str | None] = []
        log: HistoryLog

        def record() -> None:
            seen.append(log.current)

        log = HistoryLog("/", on_change=record)
        log.push("/a")
        log.back()
        log.forward()
        log.reset()
        assert seen == ["/a", "/", "/a", "/"]

    def test_not_called_on_construction(self) -> None:
        calls: list[int] = []
        HistoryLog("/", on_change=lambda: calls.append(1))
        assert calls == []
