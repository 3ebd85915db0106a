"""Tests for pi.repl.render -- Rect, Canvas and differential Screen output."""

from __future__ import annotations

from pi.repl.render import Canvas, Rect, Screen

from .virtual_terminal import VirtualTerminal


class TestRect:
    """Geometry helpers."""

    def test_edges(self) -> None:
        rect = Rect(2, 3, 10, 4)
        assert (rect.left, rect.top, rect.right, rect.bottom) == (2, 3, 12, 7)

    def test_split_horizontal(self) -> None:
        left, right = Rect(0, 0, 100, 10).split_horizontal([90, 10])
        assert left == Rect(0, 0, 90, 10)
        assert right == Rect(90, 0, 10, 10)

    def test_split_last_column_absorbs_rounding(self) -> None:
        left, right = Rect(5, 1, 81, 3).split_horizontal([90, 10])
        assert left.width == 72
        assert right.x == 77
        assert left.width + right.width == 81


class TestCanvas:
    """Drawing lines into a grid of cells."""

    def test_blank_canvas(self) -> None:
        assert Canvas(3, 2).lines() == ["   ", "   "]

    def test_area(self) -> None:
        assert Canvas(7, 4).area == Rect(0, 0, 7, 4)

    def test_draw_lines(self) -> None:
        canvas = Canvas(5, 2)
        canvas.draw_lines(canvas.area, ["ab", "cde"])
        assert canvas.lines() == ["ab   ", "cde  "]

    def test_draw_in_offset_rect(self) -> None:
        canvas = Canvas(5, 2)
        canvas.draw_lines(Rect(2, 1, 3, 1), ["xy"])
        assert canvas.lines() == ["     ", "  xy "]

    def test_clips_width(self) -> None:
        canvas = Canvas(5, 1)
        canvas.draw_lines(Rect(0, 0, 3, 1), ["abcdef"])
        assert canvas.lines() == ["abc  "]

    def test_clips_height(self) -> None:
        canvas = Canvas(3, 3)
        canvas.draw_lines(Rect(0, 0, 3, 2), ["a", "b", "c"])
        assert canvas.lines() == ["a  ", "b  ", "   "]

    def test_wide_grapheme_takes_two_cells(self) -> None:
        canvas = Canvas(5, 1)
        canvas.draw_lines(canvas.area, ["中ab"])
        assert canvas.lines() == ["中ab "]

    def test_wide_grapheme_that_does_not_fit_is_dropped(self) -> None:
        canvas = Canvas(5, 1)
        canvas.draw_lines(Rect(0, 0, 3, 1), ["ab中"])
        assert canvas.lines() == ["ab   "]

    def test_escape_sequences_are_stripped(self) -> None:
        canvas = Canvas(4, 1)
        canvas.draw_lines(canvas.area, ["\x1b[31mred\x1b[0m"])
        assert canvas.lines() == ["red "]

    def test_vertical_border(self) -> None:
        canvas = Canvas(3, 2)
        canvas.draw_vertical_border(1, canvas.area)
        assert canvas.lines() == [" │ ", " │ "]

    def test_vertical_border_outside_canvas_is_ignored(self) -> None:
        canvas = Canvas(3, 1)
        canvas.draw_vertical_border(5, canvas.area)
        assert canvas.lines() == ["   "]


def _canvas(*lines: str, width: int = 10) -> Canvas:
    canvas = Canvas(width, len(lines))
    canvas.draw_lines(canvas.area, list(lines))
    return canvas


class TestScreen:
    """Differential frame output."""

    def test_size_follows_terminal(self) -> None:
        term = VirtualTerminal(rows=5, columns=30)
        assert Screen(term).size() == Rect(0, 0, 30, 5)

    def test_first_frame_is_full_redraw(self) -> None:
        term = VirtualTerminal(rows=2, columns=10)
        screen = Screen(term)
        screen.draw(_canvas("hello", "world"))
        assert screen.full_redraws == 1
        assert "\x1b[2J" in term.output
        assert "hello" in term.output
        assert "world" in term.output

    def test_unchanged_frame_writes_no_lines(self) -> None:
        term = VirtualTerminal(rows=2, columns=10)
        screen = Screen(term)
        screen.draw(_canvas("hello", "world"))
        term.clear_buffer()
        screen.draw(_canvas("hello", "world"))
        assert "hello" not in term.output
        assert "world" not in term.output
        assert screen.full_redraws == 1

    def test_only_changed_rows_are_rewritten(self) -> None:
        term = VirtualTerminal(rows=2, columns=10)
        screen = Screen(term)
        screen.draw(_canvas("hello", "world"))
        term.clear_buffer()
        screen.draw(_canvas("hello", "there"))
        assert "\x1b[2;1H" in term.output
        assert "\x1b[1;1H" not in term.output
        assert "there" in term.output
        assert "\x1b[2J" not in term.output

    def test_size_change_forces_full_redraw(self) -> None:
        term = VirtualTerminal(rows=2, columns=10)
        screen = Screen(term)
        screen.draw(_canvas("a", "b"))
        screen.draw(_canvas("a", "b", width=12))
        assert screen.full_redraws == 2

    def test_invalidate_forces_full_redraw(self) -> None:
        term = VirtualTerminal(rows=1, columns=10)
        screen = Screen(term)
        screen.draw(_canvas("a"))
        screen.invalidate()
        term.clear_buffer()
        screen.draw(_canvas("a"))
        assert screen.full_redraws == 2
        assert "a" in term.output

    def test_cursor_is_placed_and_shown(self) -> None:
        term = VirtualTerminal(rows=3, columns=10)
        Screen(term).draw(_canvas("a", "b", "c"), (4, 1))
        assert term.cursor == (4, 1)
        assert term.cursor_visible

    def test_cursor_is_clamped_onto_canvas(self) -> None:
        term = VirtualTerminal(rows=3, columns=10)
        Screen(term).draw(_canvas("a", "b", "c"), (50, 50))
        assert term.cursor == (9, 2)

    def test_no_cursor_leaves_it_hidden(self) -> None:
        term = VirtualTerminal(rows=1, columns=10)
        Screen(term).draw(_canvas("a"), None)
        assert not term.cursor_visible
